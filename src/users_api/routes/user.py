"""User API routes."""

from fastapi import APIRouter, Depends, status
from users_common.services.user_service import UserService

from users_api.models.envelope import Envelope, UserFields
from users_api.services import get_user_service

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def _supplied(fields: UserFields | None) -> dict:
    return fields.supplied() if fields is not None else {}


@router.post("", response_model=Envelope, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_user(fields: UserFields | None = None, service: UserService = Depends(get_user_service)) -> Envelope:
    user = service.create_user(_supplied(fields))
    return Envelope(success=True, message="User created successfully", data=user, status=status.HTTP_201_CREATED)


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def list_users(service: UserService = Depends(get_user_service)) -> Envelope:
    users = service.list_users()
    return Envelope(
        success=True,
        message="Users retrieved successfully",
        data=users,
        count=len(users),
        status=status.HTTP_200_OK,
    )


@router.get("/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> Envelope:
    user = service.get_user(user_id)
    return Envelope(success=True, message="User retrieved successfully", data=user, status=status.HTTP_200_OK)


@router.put("/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def replace_user(
    user_id: str,
    fields: UserFields | None = None,
    service: UserService = Depends(get_user_service),
) -> Envelope:
    user = service.replace_user(user_id, _supplied(fields))
    return Envelope(success=True, message="User updated successfully", data=user, status=status.HTTP_200_OK)


@router.patch("/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def patch_user(
    user_id: str,
    fields: UserFields | None = None,
    service: UserService = Depends(get_user_service),
) -> Envelope:
    user = service.patch_user(user_id, _supplied(fields))
    return Envelope(success=True, message="User updated successfully", data=user, status=status.HTTP_200_OK)


@router.delete("/{user_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Envelope:
    service.delete_user(user_id)
    return Envelope(success=True, message="User deleted successfully", status=status.HTTP_200_OK)
