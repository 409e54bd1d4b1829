"""Response envelopes of the spreadsheet web-app endpoint."""

from numbers import Number
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ApiEnvelope(BaseModel):
    """Every response carries `success`; failures add a human-readable `error`."""

    success: bool = False
    error: Optional[str] = None

    class Config:
        extra = "allow"


class ServerStats(ApiEnvelope):
    """Reply to `action=stats`. Counter names are owned by the server."""

    @property
    def counts(self) -> Dict[str, float]:
        extra = self.model_extra or {}
        return {
            k: v for k, v in extra.items()
            if isinstance(v, Number) and not isinstance(v, bool)
        }


class MutationOutcome(ApiEnvelope):
    """Reply to a write action. `code` is set for addStudent."""

    code: Optional[str] = Field(None, description="Server-generated student code")

    @field_validator("code", mode="before")
    @classmethod
    def _code_text(cls, v):
        return None if v is None or v == "" else str(v)
