from typing import NamedTuple
import base64
import hashlib
import hmac
import logging
import random
import secrets
import string
import time

logger = logging.getLogger(__name__)

ALPHANUM = string.digits + string.ascii_uppercase + string.ascii_lowercase
ACTION_CLASS = "POST"


class RandomString(NamedTuple):
    value: str
    degraded: bool


def generate_random(length: int) -> RandomString:
    """Alphanumeric string from the OS random source, or a flagged seeded fallback."""
    try:
        data = secrets.token_bytes(length)
    except (NotImplementedError, OSError) as exc:
        logger.warning(
            "secure random source unavailable, using seeded fallback",
            extra={"error": str(exc)},
        )
        rng = random.Random(time.time_ns())
        return RandomString("".join(rng.choice(ALPHANUM) for _ in range(length)), True)
    return RandomString("".join(ALPHANUM[b % len(ALPHANUM)] for b in data), False)


def random_string(length: int) -> str:
    return generate_random(length).value


def _pack(*fields: str) -> bytes:
    packed = b""
    for field in fields:
        raw = field.encode("utf-8")
        packed += len(raw).to_bytes(4, "big") + raw
    return packed


def generate_token(secret: str, identity: str, action_class: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), _pack(identity, action_class), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def valid_token(token: str, secret: str, identity: str, action_class: str) -> bool:
    if not token:
        return False
    expected = generate_token(secret, identity, action_class)
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("ascii"))
