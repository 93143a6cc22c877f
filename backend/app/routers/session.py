"""
Session router for checking and clearing the registration marker.
"""
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from app.core.session import has_session, revoke_session
from app.schemas.user import MessageResponse, SessionStatus

router = APIRouter(prefix="/api/session", tags=["Session"])


@router.get(
    "",
    response_model=SessionStatus,
    responses={401: {"model": SessionStatus}},
    summary="Check session",
)
async def check_session(request: Request):
    """Report whether the caller holds the `registered` cookie."""
    if not has_session(request):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False},
        )
    return SessionStatus(authenticated=True)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Logout",
)
async def logout(response: Response):
    """Expire the `registered` cookie. A new registration is needed to get back in."""
    revoke_session(response)
    return MessageResponse(message="Logged out successfully")
