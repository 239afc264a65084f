"""Shared-secret bearer token gate."""

import hmac

from app.config import get_settings


class AccessGate:
    """Allows a request iff its token equals one statically configured secret."""

    def __init__(self, secret: str) -> None:
        self._secret = secret.encode("utf-8")

    def check(self, provided_token: str | None) -> bool:
        # An unconfigured secret rejects everything, including an empty token.
        if not self._secret or not provided_token:
            return False
        return hmac.compare_digest(provided_token.encode("utf-8"), self._secret)


_access_gate: AccessGate | None = None


def get_access_gate() -> AccessGate:
    """Get singleton access gate instance."""
    global _access_gate
    if _access_gate is None:
        _access_gate = AccessGate(get_settings().BEARER_TOKEN)
    return _access_gate
