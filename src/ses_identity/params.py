"""Operations and SES query parameter builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

IdentityKind = Literal["email", "domain"]

VERIFY_EMAIL_ACTION = "VerifyEmailIdentity"
VERIFY_DOMAIN_ACTION = "VerifyDomainIdentity"
LIST_ACTION = "ListIdentities"
DELETE_ACTION = "DeleteIdentity"
ATTRIBUTES_ACTION = "GetIdentityVerificationAttributes"

NEXT_TOKEN_PARAM = "NextToken"


@dataclass(frozen=True)
class Verify:
    identity: str


@dataclass(frozen=True)
class ListIdentities:
    pass


@dataclass(frozen=True)
class Delete:
    identity: str


@dataclass(frozen=True)
class Attributes:
    identities: tuple[str, ...]


Operation = Union[Verify, ListIdentities, Delete, Attributes]


def identity_kind(identity: str) -> IdentityKind:
    if "@" in identity:
        return "email"
    return "domain"


def parse_identity_list(raw: str) -> tuple[str, ...]:
    """Split a comma-separated identity list, dropping blank items."""
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def build_params(operation: Operation) -> dict[str, str]:
    """Map an operation onto the ordered SES query parameters, ``Action`` included."""
    params: dict[str, str] = {}
    if isinstance(operation, Verify):
        if identity_kind(operation.identity) == "email":
            params["EmailAddress"] = operation.identity
            params["Action"] = VERIFY_EMAIL_ACTION
        else:
            params["Domain"] = operation.identity
            params["Action"] = VERIFY_DOMAIN_ACTION
    elif isinstance(operation, ListIdentities):
        params["Action"] = LIST_ACTION
    elif isinstance(operation, Delete):
        params["Identity"] = operation.identity
        params["Action"] = DELETE_ACTION
    elif isinstance(operation, Attributes):
        for index, identity in enumerate(operation.identities, start=1):
            params[f"Identities.member.{index}"] = identity
        params["Action"] = ATTRIBUTES_ACTION
    else:
        raise TypeError(f"unsupported operation: {operation!r}")
    return params


def with_next_token(params: dict[str, str], next_token: str) -> dict[str, str]:
    updated = dict(params)
    updated[NEXT_TOKEN_PARAM] = next_token
    return updated
