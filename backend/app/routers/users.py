"""
Users router for registration and profile management.

These JSON endpoints are not behind the session gate; only the
/dashboard pages are.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, Response, UploadFile, status
from pydantic import ValidationError

from app.core.exceptions import (
    EmailAlreadyRegisteredError,
    ImageValidationError,
    UserNotFoundError,
)
from app.core.session import issue_session
from app.dependencies.services import UserServiceDep, read_image_upload
from app.schemas.user import (
    MessageResponse,
    UserForm,
    UserMutationResponse,
    UserResponse,
    UserStats,
    field_errors,
)

router = APIRouter(prefix="/api/users", tags=["Users"])


def parse_user_form(full_name: str, email: str, phone: str) -> UserForm:
    """Validate submitted profile fields, raising 400 with one message per field."""
    try:
        return UserForm(full_name=full_name, email=email, phone=phone)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Validation failed", "errors": field_errors(e)},
        )


def image_error(e: ImageValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": "Validation failed", "errors": {"image": str(e)}},
    )


def not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
)
async def list_users(
    user_service: UserServiceDep,
    search: Annotated[Optional[str], Query(description="Filter by name, email or phone")] = None,
):
    """
    List all registered users, newest first.
    """
    users = await user_service.list_users(search)
    return [UserResponse.model_validate(user) for user in users]


@router.post(
    "",
    response_model=UserMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register_user(
    response: Response,
    user_service: UserServiceDep,
    full_name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    image: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Register a new user with a profile picture (multipart form).

    - **full_name**: At least 2 characters
    - **email**: Valid email address (must be unique, case-insensitive)
    - **phone**: Exactly 10 digits
    - **image**: Profile picture (image/*, max 5MB)

    On success the `registered` cookie is set, which unlocks the dashboard.
    """
    form = parse_user_form(full_name, email, phone)
    upload = await read_image_upload(image)

    try:
        user = await user_service.register_user(form, upload)
    except ImageValidationError as e:
        raise image_error(e)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    issue_session(response)
    return UserMutationResponse(user=UserResponse.model_validate(user))


@router.get(
    "/stats",
    response_model=UserStats,
    summary="Registration statistics",
)
async def get_stats(user_service: UserServiceDep):
    """Total users, users registered this week, and users registered today."""
    return await user_service.get_stats()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
)
async def get_user(user_id: str, user_service: UserServiceDep):
    """Get a single user by ID."""
    try:
        user = await user_service.get_user(user_id)
    except UserNotFoundError:
        raise not_found()
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserMutationResponse,
    summary="Update user",
)
async def update_user(
    user_id: str,
    user_service: UserServiceDep,
    full_name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    image: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Update a user's details. Sending an `image` replaces the profile picture
    and removes the old one from the image host.
    """
    form = parse_user_form(full_name, email, phone)
    upload = await read_image_upload(image)

    try:
        user = await user_service.update_user(user_id, form, upload)
    except UserNotFoundError:
        raise not_found()
    except ImageValidationError as e:
        raise image_error(e)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return UserMutationResponse(user=UserResponse.model_validate(user))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
)
async def delete_user(user_id: str, user_service: UserServiceDep):
    """Delete a user and its hosted profile image."""
    try:
        await user_service.delete_user(user_id)
    except UserNotFoundError:
        raise not_found()
    return MessageResponse(message="User and associated image deleted successfully")
