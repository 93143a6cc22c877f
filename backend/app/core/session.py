"""
Cookie-based session gate.

A single "registered" marker cookie grants access to the dashboard. The marker
carries no identity: any browser holding it can manage every user record.
There is no server-side session store, so revocation only clears the cookie
in the browser that asks for it.
"""
from datetime import datetime, timezone

from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.config import get_settings

SESSION_COOKIE_VALUE = "true"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def issue_session(response: Response) -> None:
    """Set the marker cookie on a response after a successful registration."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=SESSION_COOKIE_VALUE,
        max_age=settings.session_max_age_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def has_session(request: Request) -> bool:
    """Return True if the request carries a non-empty marker cookie."""
    return bool(request.cookies.get(get_settings().session_cookie_name))


def revoke_session(response: Response) -> None:
    """Overwrite the marker with an empty, already-expired cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        expires=_EPOCH,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def is_protected_path(path: str, prefix: str) -> bool:
    """Match the prefix itself and anything below it, but not e.g. '/dashboards'."""
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


class SessionGateMiddleware(BaseHTTPMiddleware):
    """
    Redirect requests under a protected prefix when no marker cookie is present.

    Requests outside the prefix pass through untouched.
    """

    def __init__(self, app, protected_prefix: str = "/dashboard", redirect_to: str = "/register"):
        super().__init__(app)
        self.protected_prefix = protected_prefix
        self.redirect_to = redirect_to

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if is_protected_path(request.url.path, self.protected_prefix) and not has_session(request):
            return RedirectResponse(self.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
        return await call_next(request)
