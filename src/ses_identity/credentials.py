"""AWS credentials file loading."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ses_identity.errors import CredentialsError

CREDENTIALS_FILE_ENV_VAR = "AWS_CREDENTIALS_FILE"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AWSCredentials:
    access_key_id: str
    secret_key: str

    def __repr__(self) -> str:
        return f"AWSCredentials(access_key_id={self.access_key_id!r}, secret_key='***')"


def _warn_if_shared(path: Path) -> None:
    if os.name != "posix":
        return
    mode = stat.S_IMODE(path.stat().st_mode)
    if mode & (stat.S_IRWXG | stat.S_IRWXO):
        logger.info("credentials file %s is accessible by other users (mode %o)", path, mode)


def resolve_credentials_path(explicit: str | None, configured: str | None = None) -> Path:
    """Pick the credentials file: ``-k`` first, then the environment, then config."""
    if explicit:
        return Path(explicit).expanduser()
    env_path = os.getenv(CREDENTIALS_FILE_ENV_VAR)
    if env_path and env_path.strip():
        return Path(env_path.strip()).expanduser()
    if configured:
        return Path(configured).expanduser()
    raise CredentialsError(
        f"no credentials file given; pass -k FILE or set {CREDENTIALS_FILE_ENV_VAR}"
    )


def load_credentials(path: str | Path) -> AWSCredentials:
    credentials_path = Path(path)
    try:
        raw = credentials_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CredentialsError(f"cannot read credentials file: {credentials_path}") from exc

    values: dict[str, str] = {}
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        if not sep:
            raise CredentialsError(f"invalid line in credentials file: {credentials_path}")
        values[key.strip()] = value.strip()

    access_key_id = values.get("AWSAccessKeyId")
    secret_key = values.get("AWSSecretKey")
    if not access_key_id or not secret_key:
        raise CredentialsError("credentials file must contain AWSAccessKeyId and AWSSecretKey")

    _warn_if_shared(credentials_path)
    return AWSCredentials(access_key_id=access_key_id, secret_key=secret_key)
