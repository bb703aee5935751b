import hashlib
import hmac
from typing import Optional

from config.settings import settings

# Login tokens are "<user_id>.<user_type>.<hex hmac>" signed with AUTH_TOKEN_SECRET.
# There is no expiry and no revocation.


def _signature(payload: str) -> str:
    return hmac.new(settings.AUTH_TOKEN_SECRET.encode(), payload.encode(), hashlib.sha256).hexdigest()


def issue_token(user_id: int, user_type: str) -> str:
    payload = f"{user_id}.{user_type}"
    return f"{payload}.{_signature(payload)}"


def verify_token(token: str) -> Optional[dict]:
    """Return {"user_id", "user_type"} for a valid token, None otherwise."""
    try:
        user_id, user_type, signature = token.split(".", 2)
    except ValueError:
        return None
    # timing safe compare
    if not hmac.compare_digest(signature, _signature(f"{user_id}.{user_type}")):
        return None
    try:
        return {"user_id": int(user_id), "user_type": user_type}
    except ValueError:
        return None
