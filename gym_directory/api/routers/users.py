"""/users routers. Responses never include the password."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Response, status

from gym_directory.api.deps import get_user_service
from gym_directory.schemas.common import ErrorResponse, ValidationErrorResponse
from gym_directory.schemas.user import UserDetail, UserListResponse, UserRead
from gym_directory.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


_NOT_FOUND = {
    400: {"model": ErrorResponse, "description": "invalid id"},
    404: {"model": ErrorResponse, "description": "Not Found"},
}


@router.get("", response_model=UserListResponse, summary="ユーザー一覧（新しい順）")
async def list_users(svc: UserService = Depends(get_user_service)):
    items = await svc.list()
    return UserListResponse(items=items, total=len(items))


@router.get(
    "/{user_id}",
    response_model=UserDetail,
    summary="ユーザー詳細",
    description="お気に入りとレビュー先のジムを {id, name, brand} に解決します。",
    responses=_NOT_FOUND,
)
async def get_user(
    user_id: str = Path(..., description="ユーザーID"),
    svc: UserService = Depends(get_user_service),
):
    return await svc.get(user_id)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="ユーザー登録",
    responses={
        400: {"model": ValidationErrorResponse, "description": "validation error"},
        409: {"model": ErrorResponse, "description": "email already exists"},
    },
)
async def create_user(
    payload: dict[str, Any] = Body(...),
    svc: UserService = Depends(get_user_service),
):
    return await svc.create(payload)


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="ユーザー部分更新（password は無視）",
    responses={
        **_NOT_FOUND,
        400: {"model": ValidationErrorResponse, "description": "validation error / invalid id"},
        409: {"model": ErrorResponse, "description": "email already exists"},
    },
)
async def update_user(
    user_id: str = Path(..., description="ユーザーID"),
    payload: dict[str, Any] = Body(...),
    svc: UserService = Depends(get_user_service),
):
    return await svc.update(user_id, payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="ユーザー削除",
    responses=_NOT_FOUND,
)
async def delete_user(
    user_id: str = Path(..., description="ユーザーID"),
    svc: UserService = Depends(get_user_service),
):
    await svc.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{user_id}/favorites",
    response_model=UserRead,
    summary="お気に入り追加",
    responses={
        **_NOT_FOUND,
        409: {"model": ErrorResponse, "description": "already a favorite"},
    },
)
async def add_favorite(
    user_id: str = Path(..., description="ユーザーID"),
    payload: dict[str, Any] = Body(...),
    svc: UserService = Depends(get_user_service),
):
    return await svc.add_favorite(user_id, payload.get("gym_id"))
