"""Admin authentication — sessions are Supabase access tokens.

The token travels in an HTTP-only cookie for the admin pages, or in an
`Authorization: Bearer` header for API callers.
"""

from dataclasses import dataclass

from fastapi import HTTPException, Request
from fastapi.responses import RedirectResponse

from riseup_site import supabase_client as db
from riseup_site.config import SESSION_COOKIE_NAME

LOGIN_PATH = "/admin/login"


@dataclass
class AdminUser:
    id: str
    email: str


def _token_from_request(request: Request) -> str:
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.cookies.get(SESSION_COOKIE_NAME, "")


def current_admin(request: Request) -> AdminUser | None:
    """The signed-in admin for this request, or None."""
    token = _token_from_request(request)
    if not token:
        return None
    user = db.get_user_for_token(token)
    if user is None:
        return None
    return AdminUser(id=str(user.id), email=getattr(user, "email", "") or "")


def require_admin_api(request: Request) -> AdminUser:
    """Dependency for JSON routes: 401 when not signed in."""
    admin = current_admin(request)
    if admin is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return admin


class LoginRequired(Exception):
    """Raised by HTML routes; the app turns it into a redirect to the login page."""


def require_admin_page(request: Request) -> AdminUser:
    """Dependency for HTML routes: redirect to login when not signed in."""
    admin = current_admin(request)
    if admin is None:
        raise LoginRequired()
    return admin


async def login_redirect(request: Request, exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=303)
