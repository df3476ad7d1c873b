"""Line-oriented rendering of SES XML responses."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TextIO

from ses_identity.errors import RenderError
from ses_identity.models import VerificationAttributes
from ses_identity.params import (
    ATTRIBUTES_ACTION,
    DELETE_ACTION,
    LIST_ACTION,
    VERIFY_DOMAIN_ACTION,
    VERIFY_EMAIL_ACTION,
    Attributes,
    Delete,
    ListIdentities,
    Operation,
    Verify,
    identity_kind,
)

ATTRIBUTES_HEADER = "Identity,Status,VerificationToken"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _path(*parts: str) -> str:
    return "/".join(f"{{*}}{part}" for part in parts)


def _parse(body: str, action: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise RenderError(f"malformed {action} response: {exc}", action=action) from exc
    expected = f"{action}Response"
    if _local_name(root.tag) != expected:
        raise RenderError(
            f"unexpected response element {_local_name(root.tag)!r}, expected {expected!r}",
            action=action,
        )
    return root


def _required_text(node: ET.Element, path: str, action: str) -> str:
    found = node.find(path)
    if found is None:
        raise RenderError(f"{action} response is missing {path.replace('{*}', '')}", action=action)
    return found.text or ""


def domain_verification_token(body: str) -> str:
    root = _parse(body, VERIFY_DOMAIN_ACTION)
    return _required_text(
        root,
        _path("VerifyDomainIdentityResult", "VerificationToken"),
        VERIFY_DOMAIN_ACTION,
    )


def identity_members(body: str) -> list[str]:
    root = _parse(body, LIST_ACTION)
    members = root.findall(_path("ListIdentitiesResult", "Identities", "member"))
    return [member.text or "" for member in members]


def verification_attributes(body: str) -> list[VerificationAttributes]:
    root = _parse(body, ATTRIBUTES_ACTION)
    entries = root.findall(
        _path("GetIdentityVerificationAttributesResult", "VerificationAttributes", "entry")
    )
    records: list[VerificationAttributes] = []
    for entry in entries:
        identity = _required_text(entry, _path("key"), ATTRIBUTES_ACTION)
        value = entry.find(_path("value"))
        if value is None:
            raise RenderError(f"attributes entry for {identity!r} has no value", action=ATTRIBUTES_ACTION)
        status = _required_text(value, _path("VerificationStatus"), ATTRIBUTES_ACTION)
        token_node = value.find(_path("VerificationToken"))
        token = (token_node.text or "") if token_node is not None else None
        records.append(
            VerificationAttributes(identity=identity, status=status, verification_token=token)
        )
    return records


def render_response(operation: Operation, body: str, stdout: TextIO) -> None:
    """Parse ``body`` for ``operation`` and print its records to ``stdout``.

    Bodies are parsed for every operation, including those that print
    nothing, so a malformed document always raises :class:`RenderError`.
    """
    if isinstance(operation, Verify):
        if identity_kind(operation.identity) == "email":
            # The verification link is mailed out of band; nothing to show.
            _parse(body, VERIFY_EMAIL_ACTION)
            return
        print(domain_verification_token(body), file=stdout)
    elif isinstance(operation, ListIdentities):
        for member in identity_members(body):
            print(member, file=stdout)
    elif isinstance(operation, Delete):
        _parse(body, DELETE_ACTION)
    elif isinstance(operation, Attributes):
        records = verification_attributes(body)
        print(ATTRIBUTES_HEADER, file=stdout)
        for record in records:
            print(record.as_row(), file=stdout)
    else:
        raise TypeError(f"unsupported operation: {operation!r}")
    stdout.flush()
