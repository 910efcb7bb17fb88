"""Telegram WebApp init data verification.

The Mini App sends ``Telegram.WebApp.initData`` with every request. It is a
query string signed by Telegram with a key derived from the bot token:

    secret_key = HMAC_SHA256(key="WebAppData", msg=bot_token)
    hash = hex(HMAC_SHA256(key=secret_key, msg=data_check_string))

where ``data_check_string`` is every field except ``hash``, sorted by key and
rendered as ``key=value`` lines joined with ``\\n``.
"""

import hashlib
import hmac
import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from seednote_api.domain.models import Principal

WEB_APP_DATA_KEY = b"WebAppData"
_MAX_CLOCK_SKEW_SECONDS = 60
_MAX_FIELDS = 32


class VerificationError(Exception):
    """Init data could not be turned into an authenticated principal."""


class MalformedPayload(VerificationError):
    """Init data is empty, not a valid query string, or has no hash."""


class SignatureMismatch(VerificationError):
    """Init data hash does not match the expected signature."""


class MissingIdentity(VerificationError):
    """Signed init data carries no usable user object."""


class ExpiredPayload(VerificationError):
    """Init data auth_date falls outside the accepted window."""


def parse_init_data(init_data: str | None) -> dict[str, str]:
    """Parse raw init data into an ordered mapping of fields."""
    if not init_data:
        raise MalformedPayload("init data is empty")
    try:
        pairs = parse_qsl(
            init_data,
            keep_blank_values=True,
            strict_parsing=True,
            max_num_fields=_MAX_FIELDS,
        )
    except ValueError as exc:
        raise MalformedPayload("init data is not a valid query string") from exc
    fields: dict[str, str] = {}
    for key, value in pairs:
        if key in fields:
            raise MalformedPayload(f"duplicate field {key!r} in init data")
        fields[key] = value
    if not fields.get("hash"):
        raise MalformedPayload("init data has no hash")
    return fields


def build_data_check_string(fields: Mapping[str, str]) -> str:
    """Return the sorted, newline-joined ``key=value`` lines used as HMAC input."""
    return "\n".join(
        f"{key}={fields[key]}" for key in sorted(fields) if key != "hash"
    )


def compute_signature(data_check_string: str, bot_token: str) -> str:
    """Compute the lowercase hex signature Telegram puts in ``hash``."""
    secret_key = hmac.new(
        WEB_APP_DATA_KEY, bot_token.encode("utf-8"), hashlib.sha256
    ).digest()
    return hmac.new(
        secret_key, data_check_string.encode("utf-8"), hashlib.sha256
    ).hexdigest()


@dataclass
class IdentityVerifier:
    """Verify init data signatures and extract the requesting user."""

    bot_token: str
    max_age_seconds: int | None = None
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def verify(self, init_data: str | None) -> Principal:
        """Return the principal for signed init data or raise VerificationError."""
        fields = parse_init_data(init_data)
        received_hash = fields.pop("hash")
        try:
            expected_hash = compute_signature(
                build_data_check_string(fields), self.bot_token
            )
            matches = hmac.compare_digest(
                expected_hash.encode("ascii"), received_hash.encode("utf-8")
            )
        except Exception as exc:
            raise SignatureMismatch("init data signature could not be checked") from exc
        if not matches:
            raise SignatureMismatch("init data signature does not match")
        if self.max_age_seconds is not None:
            self._check_auth_date(fields.get("auth_date"))
        return _parse_principal(fields.get("user"))

    def _check_auth_date(self, raw: str | None) -> None:
        try:
            auth_date = int(raw or "")
        except ValueError as exc:
            raise ExpiredPayload("init data has no valid auth_date") from exc
        now = self.clock()
        if auth_date > now + _MAX_CLOCK_SKEW_SECONDS:
            raise ExpiredPayload("init data auth_date is in the future")
        if now - auth_date > self.max_age_seconds:
            raise ExpiredPayload("init data has expired")


def _parse_principal(raw_user: str | None) -> Principal:
    """Parse the ``user`` JSON field into a Principal."""
    if not raw_user:
        raise MissingIdentity("init data has no user")
    try:
        user = json.loads(raw_user)
    except ValueError as exc:
        raise MissingIdentity("init data user is not valid JSON") from exc
    if not isinstance(user, dict):
        raise MissingIdentity("init data user is not an object")
    user_id = user.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise MissingIdentity("init data user has no numeric id")
    return Principal(
        id=user_id,
        first_name=_optional_str(user.get("first_name")),
        last_name=_optional_str(user.get("last_name")),
        username=_optional_str(user.get("username")),
        language_code=_optional_str(user.get("language_code")),
    )


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None
