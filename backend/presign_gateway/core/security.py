import hmac

from presign_gateway.core.errors import AuthMisconfiguredError, UnauthorizedError

BEARER_PREFIX = "bearer "


def _matches(presented: str, expected: str) -> bool:
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def bearer_token(authorization: str | None) -> str | None:
    """Return the token part of ``Authorization: Bearer <token>``; the scheme is case-insensitive."""
    value = (authorization or "").strip()
    if not value.lower().startswith(BEARER_PREFIX):
        return None
    return value[len(BEARER_PREFIX):].strip()


def verify_api_token(
    expected_token: str,
    x_api_token: str | None,
    authorization: str | None,
) -> None:
    """Check the presented credential against the configured shared secret.

    Either ``x-api-token: <token>`` or ``Authorization: Bearer <token>`` is
    accepted. An empty configured secret denies everything.
    """
    expected = (expected_token or "").strip()
    if not expected:
        raise AuthMisconfiguredError()

    direct = (x_api_token or "").strip()
    if direct and _matches(direct, expected):
        return

    token = bearer_token(authorization)
    if token and _matches(token, expected):
        return

    raise UnauthorizedError()
