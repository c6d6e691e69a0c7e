import secrets
from typing import Optional

from fastapi import HTTPException, Header, Query, Request, status

from app.core.logger import logger


def generate_admin_token() -> str:
    """
    Create the admin secret for this process.
    It lives only in memory, so every restart invalidates old admin links.
    """
    return secrets.token_hex(16)


def build_admin_url(base_url: str, admin_path: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/{admin_path.lstrip('/')}?token={token}"


async def require_admin_token(
    request: Request,
    token: Optional[str] = Query(None),
    x_admin_token: Optional[str] = Header(None),
):
    """
    Verify the admin token sent as `?token=` or in the `x-admin-token` header
    against the secret generated at startup (stored on app.state).
    """
    expected = getattr(request.app.state, "admin_token", None)
    supplied = token or x_admin_token

    if not expected or not supplied or supplied != expected:
        logger.warning(f"🚫 Rejected admin request: {request.method} {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return True
