"""SES identity verification client public surface."""

from ses_identity.client import DEFAULT_ENDPOINT, SESClient
from ses_identity.credentials import AWSCredentials, load_credentials, resolve_credentials_path
from ses_identity.dispatch import DispatchState, Dispatcher, classify
from ses_identity.errors import CredentialsError, RenderError, SESError, SESUnavailableError
from ses_identity.models import CallResult, VerificationAttributes
from ses_identity.params import (
    Attributes,
    Delete,
    ListIdentities,
    Operation,
    Verify,
    build_params,
    identity_kind,
)
from ses_identity.render import render_response

__all__ = [
    "SESError",
    "SESUnavailableError",
    "CredentialsError",
    "RenderError",
    "SESClient",
    "DEFAULT_ENDPOINT",
    "AWSCredentials",
    "load_credentials",
    "resolve_credentials_path",
    "CallResult",
    "VerificationAttributes",
    "Operation",
    "Verify",
    "ListIdentities",
    "Delete",
    "Attributes",
    "build_params",
    "identity_kind",
    "render_response",
    "Dispatcher",
    "DispatchState",
    "classify",
]
