"""Puppet Forge v3 response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

FORGE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def _parse_forge_timestamp(value: object) -> object:
    """Accept the Forge's ``2019-07-10 12:25:13 -0700`` form alongside ISO 8601."""

    if isinstance(value, str):
        try:
            return datetime.strptime(value, FORGE_TIMESTAMP_FORMAT)
        except ValueError:
            return value
    return value


ForgeTimestamp = Annotated[datetime, BeforeValidator(_parse_forge_timestamp)]


class ForgeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ForgePagination(ForgeBaseModel):
    limit: int
    offset: int
    total: int
    next: str | None = None


class ForgeReleaseSummary(ForgeBaseModel):
    slug: str | None = None
    version: str
    deleted_at: ForgeTimestamp | None = None


class ForgeModuleRef(ForgeBaseModel):
    slug: str


class ForgeModule(ForgeBaseModel):
    slug: str
    releases: list[ForgeReleaseSummary] = Field(default_factory=list[ForgeReleaseSummary])


class ForgeRelease(ForgeBaseModel):
    version: str
    module: ForgeModuleRef
    created_at: ForgeTimestamp | None = None
    deleted_at: ForgeTimestamp | None = None


class ForgeModulePage(ForgeBaseModel):
    pagination: ForgePagination
    results: list[ForgeModule]


class ForgeReleasePage(ForgeBaseModel):
    pagination: ForgePagination
    results: list[ForgeRelease]


class ForgeErrorResponse(ForgeBaseModel):
    message: str
    errors: list[str] = Field(default_factory=list[str])
