from __future__ import annotations

import pytest

from ses_identity.params import (
    Attributes,
    Delete,
    ListIdentities,
    Verify,
    build_params,
    identity_kind,
    parse_identity_list,
    with_next_token,
)


def test_identity_kind_classifies_by_at_sign() -> None:
    assert identity_kind("a@b.com") == "email"
    assert identity_kind("example.com") == "domain"
    assert identity_kind("@example.com") == "email"
    assert identity_kind("user@") == "email"


def test_verify_email_params() -> None:
    assert build_params(Verify(identity="a@b.com")) == {
        "EmailAddress": "a@b.com",
        "Action": "VerifyEmailIdentity",
    }


def test_verify_domain_params() -> None:
    assert build_params(Verify(identity="example.com")) == {
        "Domain": "example.com",
        "Action": "VerifyDomainIdentity",
    }


def test_list_params() -> None:
    assert build_params(ListIdentities()) == {"Action": "ListIdentities"}


def test_delete_params() -> None:
    assert build_params(Delete(identity="example.com")) == {
        "Identity": "example.com",
        "Action": "DeleteIdentity",
    }


def test_attributes_params_are_one_indexed_in_input_order() -> None:
    params = build_params(Attributes(identities=("a.com", "b.com")))
    assert params == {
        "Identities.member.1": "a.com",
        "Identities.member.2": "b.com",
        "Action": "GetIdentityVerificationAttributes",
    }
    assert list(params) == ["Identities.member.1", "Identities.member.2", "Action"]


def test_build_params_rejects_unknown_operation() -> None:
    with pytest.raises(TypeError):
        build_params("ListIdentities")  # type: ignore[arg-type]


def test_parse_identity_list_strips_and_drops_blanks() -> None:
    assert parse_identity_list("a.com, b@c.com,,") == ("a.com", "b@c.com")
    assert parse_identity_list(" , ") == ()


def test_with_next_token_does_not_mutate_input() -> None:
    params = {"Action": "ListIdentities"}
    updated = with_next_token(params, "tok-1")
    assert updated == {"Action": "ListIdentities", "NextToken": "tok-1"}
    assert params == {"Action": "ListIdentities"}
