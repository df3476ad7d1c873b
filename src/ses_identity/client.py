"""Signed SES query API client."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import formatdate

from ses_identity.credentials import AWSCredentials
from ses_identity.errors import SESUnavailableError
from ses_identity.models import THROTTLING_FLAG_PREFIX, CallResult

DEFAULT_ENDPOINT = "https://email.us-east-1.amazonaws.com/"
USER_AGENT = "ses-identity"

_THROTTLING_MESSAGES = (
    ("Daily message quota exceeded", f"{THROTTLING_FLAG_PREFIX}_DAILY_QUOTA"),
    ("Maximum sending rate exceeded", f"{THROTTLING_FLAG_PREFIX}_MAX_SEND_RATE"),
)

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def sign(secret_key: str, date: str) -> str:
    digest = hmac.new(secret_key.encode("utf-8"), date.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(credentials: AWSCredentials, date: str) -> str:
    return (
        f"AWS3-HTTPS AWSAccessKeyId={credentials.access_key_id},"
        f"Algorithm=HmacSHA256,Signature={sign(credentials.secret_key, date)}"
    )


def _find_text(root: ET.Element, name: str) -> str | None:
    node = root.find(f".//{{*}}{name}")
    if node is None:
        return None
    return node.text


def throttling_flag(body: str) -> str:
    """Derive the throttling flag from an SES error document, or ``""``."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return ""
    if (_find_text(root, "Code") or "").strip() != "Throttling":
        return ""
    message = _find_text(root, "Message") or ""
    for fragment, flag in _THROTTLING_MESSAGES:
        if fragment in message:
            return flag
    return THROTTLING_FLAG_PREFIX


def next_token(body: str) -> str | None:
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        # The renderer reports malformed success bodies.
        return None
    token = _find_text(root, "NextToken")
    return token.strip() or None if token else None


@dataclass
class SESClient:
    credentials: AWSCredentials
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 30.0

    def __post_init__(self) -> None:
        try:
            import requests
        except Exception as exc:  # pragma: no cover
            raise SESUnavailableError(f"requests stack unavailable: {exc}") from exc

        self._requests = requests
        self._session = requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT

    def _signed_headers(self) -> dict[str, str]:
        date = formatdate(usegmt=True)
        return {
            "Date": date,
            "X-Amzn-Authorization": authorization_header(self.credentials, date),
            "Content-Type": "application/x-www-form-urlencoded",
        }

    def call(self, params: dict[str, str]) -> CallResult:
        payload = dict(params)
        payload["AWSAccessKeyId"] = self.credentials.access_key_id
        payload["Timestamp"] = _utc_timestamp()
        logger.debug("POST %s Action=%s", self.endpoint, params.get("Action"))
        try:
            response = self._session.request(
                "POST",
                self.endpoint,
                data=payload,
                headers=self._signed_headers(),
                timeout=self.timeout,
            )
        except self._requests.RequestException as exc:
            raise SESUnavailableError(f"SES request failed: {exc}") from exc

        body = response.text
        logger.debug("response status=%s body=%s", response.status_code, body)
        if response.status_code == 200:
            return CallResult(status_code=200, body=body, next_token=next_token(body))
        return CallResult(status_code=response.status_code, body=body, flag=throttling_flag(body))


__all__ = ["SESClient", "DEFAULT_ENDPOINT"]
