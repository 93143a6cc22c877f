"""
HTML pages: landing page, registration form, and the user dashboard.

Everything under /dashboard is behind SessionGateMiddleware, so handlers
here can assume the visitor holds the registration marker.
"""
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.core.exceptions import (
    EmailAlreadyRegisteredError,
    ImageHostError,
    ImageValidationError,
    UserNotFoundError,
)
from app.core.session import has_session, issue_session, revoke_session
from app.dependencies.services import UserServiceDep, read_image_upload
from app.schemas.user import UserForm, field_errors

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"], include_in_schema=False)

UPSTREAM_FAILURE = "Something went wrong while saving. Please try again later."


def render(request: Request, name: str, status_code: int = status.HTTP_200_OK, **context) -> HTMLResponse:
    context.setdefault("registered", has_session(request))
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def not_found_page(request: Request) -> HTMLResponse:
    return render(
        request,
        "error.html",
        status_code=status.HTTP_404_NOT_FOUND,
        title="User not found",
        message="The user you are looking for does not exist or was deleted.",
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return render(request, "home.html")


@router.get("/register", response_class=HTMLResponse)
async def register_page(request: Request):
    return render(request, "register.html", values={}, errors={})


@router.post("/register", response_class=HTMLResponse)
async def register_submit(
    request: Request,
    user_service: UserServiceDep,
    full_name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    image: Annotated[Optional[UploadFile], File()] = None,
):
    values = {"full_name": full_name, "email": email, "phone": phone}

    def form_error(errors: dict, status_code: int) -> HTMLResponse:
        return render(request, "register.html", status_code=status_code, values=values, errors=errors)

    try:
        form = UserForm(**values)
    except ValidationError as e:
        return form_error(field_errors(e), status.HTTP_400_BAD_REQUEST)

    try:
        await user_service.register_user(form, await read_image_upload(image))
    except ImageValidationError as e:
        return form_error({"image": str(e)}, status.HTTP_400_BAD_REQUEST)
    except EmailAlreadyRegisteredError as e:
        return form_error({"email": str(e)}, status.HTTP_409_CONFLICT)
    except ImageHostError:
        return form_error({"form": UPSTREAM_FAILURE}, status.HTTP_502_BAD_GATEWAY)

    response = redirect("/dashboard")
    issue_session(response)
    return response


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    user_service: UserServiceDep,
    q: Optional[str] = None,
):
    users = await user_service.list_users(q)
    stats = await user_service.get_stats()
    return render(request, "dashboard.html", users=users, stats=stats, q=q or "")


@router.get("/dashboard/edit-user/{user_id}", response_class=HTMLResponse)
async def edit_user_page(request: Request, user_id: str, user_service: UserServiceDep):
    try:
        user = await user_service.get_user(user_id)
    except UserNotFoundError:
        return not_found_page(request)
    values = {"full_name": user.full_name, "email": user.email, "phone": user.phone}
    return render(request, "edit_user.html", user=user, values=values, errors={})


@router.post("/dashboard/edit-user/{user_id}", response_class=HTMLResponse)
async def edit_user_submit(
    request: Request,
    user_id: str,
    user_service: UserServiceDep,
    full_name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    image: Annotated[Optional[UploadFile], File()] = None,
):
    values = {"full_name": full_name, "email": email, "phone": phone}
    try:
        user = await user_service.get_user(user_id)
    except UserNotFoundError:
        return not_found_page(request)

    def form_error(errors: dict, status_code: int) -> HTMLResponse:
        return render(
            request, "edit_user.html", status_code=status_code, user=user, values=values, errors=errors
        )

    try:
        form = UserForm(**values)
    except ValidationError as e:
        return form_error(field_errors(e), status.HTTP_400_BAD_REQUEST)

    try:
        await user_service.update_user(user_id, form, await read_image_upload(image))
    except UserNotFoundError:
        return not_found_page(request)
    except ImageValidationError as e:
        return form_error({"image": str(e)}, status.HTTP_400_BAD_REQUEST)
    except EmailAlreadyRegisteredError as e:
        return form_error({"email": str(e)}, status.HTTP_409_CONFLICT)
    except ImageHostError:
        return form_error({"form": UPSTREAM_FAILURE}, status.HTTP_502_BAD_GATEWAY)

    return redirect("/dashboard")


@router.post("/dashboard/delete-user/{user_id}")
async def delete_user_submit(request: Request, user_id: str, user_service: UserServiceDep):
    try:
        await user_service.delete_user(user_id)
    except UserNotFoundError:
        return not_found_page(request)
    return redirect("/dashboard")


@router.post("/logout")
async def logout():
    response = redirect("/register")
    revoke_session(response)
    return response
