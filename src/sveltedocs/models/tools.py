from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, field_validator


class LookupKind(StrEnum):
    COMPONENT = "component"
    DOC = "doc"
    INSTALLATION = "installation"
    MIGRATION = "migration"
    THEMING = "theming"


class GetDocsInput(BaseModel):
    name: str
    kind: LookupKind

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("name must not be empty")
        if len(v) > 200:
            raise ValueError("name must not exceed 200 characters")
        if ".." in v or any(ch.isspace() for ch in v):
            raise ValueError(f"Invalid name: {v!r}")
        return v
