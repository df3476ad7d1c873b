"""Call results and parsed SES response records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

SES_NAMESPACE = "http://ses.amazonaws.com/doc/2010-12-01/"
THROTTLING_FLAG_PREFIX = "THROTTLING"


@dataclass(frozen=True)
class CallResult:
    status_code: int
    body: str
    flag: str = ""
    next_token: str | None = None

    @property
    def throttled(self) -> bool:
        return self.flag.startswith(THROTTLING_FLAG_PREFIX)


class VerificationAttributes(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    identity: str
    status: str
    verification_token: Optional[str] = None

    def as_row(self) -> str:
        # Values are joined verbatim; commas inside a value are not escaped.
        return ",".join((self.identity, self.status, self.verification_token or ""))
