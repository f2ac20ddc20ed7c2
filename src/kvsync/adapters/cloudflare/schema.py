"""Cloudflare Workers KV payload schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

log = logging.getLogger(__name__)


class CloudflareBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Cloudflare %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class ApiMessage(CloudflareBaseModel):
    code: int | None = None
    message: str = ""


class KeyName(CloudflareBaseModel):
    name: str
    expiration: int | None = None


class KeyListResultInfo(CloudflareBaseModel):
    count: int | None = None
    cursor: str | None = None
    list_complete: bool = False


class KeyListResponse(CloudflareBaseModel):
    success: bool = True
    errors: list[ApiMessage] = Field(default_factory=list)
    result: list[KeyName] = Field(default_factory=list)
    result_info: KeyListResultInfo = Field(default_factory=KeyListResultInfo)


class BulkRecord(BaseModel):
    """One element of a bulk mutation body."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str | None = None
    delete: bool = False

    @model_serializer
    def serialize_record(self) -> dict[str, object]:
        if self.delete:
            return {"key": self.key, "delete": True}
        return {"key": self.key, "value": self.value}
