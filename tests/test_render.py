from __future__ import annotations

import io

import pytest

from ses_identity.errors import RenderError
from ses_identity.params import Attributes, Delete, ListIdentities, Verify
from ses_identity.render import render_response, verification_attributes

NS = "http://ses.amazonaws.com/doc/2010-12-01/"


def _list_body(*members: str) -> str:
    items = "".join(f"<member>{m}</member>" for m in members)
    return (
        f'<ListIdentitiesResponse xmlns="{NS}">'
        f"<ListIdentitiesResult><Identities>{items}</Identities></ListIdentitiesResult>"
        "<ResponseMetadata><RequestId>r-1</RequestId></ResponseMetadata>"
        "</ListIdentitiesResponse>"
    )


ATTRIBUTES_BODY = f"""<?xml version="1.0"?>
<GetIdentityVerificationAttributesResponse xmlns="{NS}">
  <GetIdentityVerificationAttributesResult>
    <VerificationAttributes>
      <entry>
        <key>example.com</key>
        <value>
          <VerificationStatus>Pending</VerificationStatus>
          <VerificationToken>QGGTv2Ge6GxiNDjfBhK4</VerificationToken>
        </value>
      </entry>
      <entry>
        <key>user@example.com</key>
        <value>
          <VerificationStatus>Success</VerificationStatus>
        </value>
      </entry>
    </VerificationAttributes>
  </GetIdentityVerificationAttributesResult>
</GetIdentityVerificationAttributesResponse>
"""


def test_list_renders_members_in_document_order() -> None:
    out = io.StringIO()
    render_response(ListIdentities(), _list_body("x@y.com", "z.com"), out)
    assert out.getvalue() == "x@y.com\nz.com\n"


def test_list_with_no_members_prints_nothing() -> None:
    out = io.StringIO()
    render_response(ListIdentities(), _list_body(), out)
    assert out.getvalue() == ""


def test_verify_domain_prints_token() -> None:
    body = (
        f'<VerifyDomainIdentityResponse xmlns="{NS}">'
        "<VerifyDomainIdentityResult><VerificationToken>abc123=</VerificationToken>"
        "</VerifyDomainIdentityResult></VerifyDomainIdentityResponse>"
    )
    out = io.StringIO()
    render_response(Verify(identity="example.com"), body, out)
    assert out.getvalue() == "abc123=\n"


def test_verify_domain_without_token_is_render_error() -> None:
    body = (
        f'<VerifyDomainIdentityResponse xmlns="{NS}">'
        "<VerifyDomainIdentityResult/></VerifyDomainIdentityResponse>"
    )
    with pytest.raises(RenderError):
        render_response(Verify(identity="example.com"), body, io.StringIO())


def test_verify_email_prints_nothing() -> None:
    body = f'<VerifyEmailIdentityResponse xmlns="{NS}"><VerifyEmailIdentityResult/></VerifyEmailIdentityResponse>'
    out = io.StringIO()
    render_response(Verify(identity="a@b.com"), body, out)
    assert out.getvalue() == ""


def test_delete_prints_nothing() -> None:
    body = f'<DeleteIdentityResponse xmlns="{NS}"><DeleteIdentityResult/></DeleteIdentityResponse>'
    out = io.StringIO()
    render_response(Delete(identity="a@b.com"), body, out)
    assert out.getvalue() == ""


def test_attributes_render_header_and_empty_token_field() -> None:
    out = io.StringIO()
    render_response(Attributes(identities=("example.com", "user@example.com")), ATTRIBUTES_BODY, out)
    lines = out.getvalue().splitlines()
    assert lines == [
        "Identity,Status,VerificationToken",
        "example.com,Pending,QGGTv2Ge6GxiNDjfBhK4",
        "user@example.com,Success,",
    ]
    assert all(line.count(",") == 2 for line in lines)


def test_attributes_records_keep_missing_token_as_none() -> None:
    records = verification_attributes(ATTRIBUTES_BODY)
    assert [r.identity for r in records] == ["example.com", "user@example.com"]
    assert records[1].verification_token is None


def test_attribute_values_with_commas_are_not_escaped() -> None:
    body = ATTRIBUTES_BODY.replace("Pending", "Pending,Later")
    out = io.StringIO()
    render_response(Attributes(identities=("example.com",)), body, out)
    assert "example.com,Pending,Later,QGGTv2Ge6GxiNDjfBhK4" in out.getvalue().splitlines()


def test_malformed_body_is_render_error() -> None:
    with pytest.raises(RenderError):
        render_response(ListIdentities(), "<ListIdentitiesResponse>", io.StringIO())


def test_unexpected_root_element_is_render_error() -> None:
    with pytest.raises(RenderError):
        render_response(ListIdentities(), ATTRIBUTES_BODY, io.StringIO())


def test_unnamespaced_body_is_accepted() -> None:
    body = "<ListIdentitiesResponse><ListIdentitiesResult><Identities><member>a.com</member></Identities></ListIdentitiesResult></ListIdentitiesResponse>"
    out = io.StringIO()
    render_response(ListIdentities(), body, out)
    assert out.getvalue() == "a.com\n"
