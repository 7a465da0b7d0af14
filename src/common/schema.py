"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import StringConstraints

ExternalIdType = t.Annotated[str, StringConstraints(min_length=1, max_length=128, strip_whitespace=True)]
OneToTwoFiftyFiveString = t.Annotated[str, StringConstraints(min_length=1, max_length=255, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"
