"""Request/response contract shared by every proxy handler."""

import json
from dataclasses import dataclass, field
from enum import StrEnum


class RejectReason(StrEnum):
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    RATE_LIMITED = "RATE_LIMITED"
    MISSING_IDENTIFIER = "MISSING_IDENTIFIER"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_DATE = "INVALID_DATE"


@dataclass(frozen=True)
class GateResult:
    check_name: str
    passed: bool
    reject_reason: RejectReason | None
    detail: str


@dataclass(frozen=True)
class ProxyRequest:
    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    remote_addr: str | None = None


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    headers: dict[str, str]
    body: dict | None

    @property
    def body_text(self) -> str:
        return "" if self.body is None else json.dumps(self.body)

    def to_dict(self) -> dict:
        """Function-as-a-service shape: body serialised to a JSON string."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body_text,
        }


@dataclass(frozen=True)
class GateVerdict:
    passed: bool
    checks: list[GateResult]

    @property
    def failure(self) -> GateResult | None:
        for c in self.checks:
            if not c.passed:
                return c
        return None
