"""/gyms routers that delegate to GymService via DI."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status

from gym_directory.api.deps import get_gym_service
from gym_directory.repositories.interfaces import GymFilter
from gym_directory.schemas.common import ErrorResponse, ValidationErrorResponse
from gym_directory.schemas.gym import GymListResponse, GymRead
from gym_directory.services.gyms import GymService

router = APIRouter(prefix="/gyms", tags=["gyms"])

_LIST_DESC = (
    "条件はすべて AND で組み合わせます。\n"
    "- has_shower=true: シャワーありのみ（互換: filter_by=Showers）\n"
    "- brand / equipment_type: 大文字小文字を区別しない部分一致\n"
    "- size: small / medium / large（klein / middelgroot / groot も可）\n"
    "- sort_by=rating: 平均評価 DESC\n"
    "- sort_by=distance (afstand): 距離 ASC\n"
    "- sort_by=size (grootte): small < medium < large\n"
    "- それ以外: name ASC\n"
)


@router.get(
    "",
    response_model=GymListResponse,
    summary="ジム一覧（フィルタ + ソート）",
    description=_LIST_DESC,
)
async def list_gyms(
    has_shower: bool = Query(False, description="シャワーありのジムのみ"),
    filter_by: str | None = Query(None, description="互換用: 'Showers' で has_shower=true と同じ"),
    brand: str | None = Query(None, description="ブランド（部分一致）"),
    size: str | None = Query(None, description="サイズ"),
    equipment_type: str | None = Query(None, description="設備名（部分一致）"),
    sort_by: str | None = Query(None, description="rating / distance / size / name"),
    svc: GymService = Depends(get_gym_service),
):
    filters = GymFilter(
        has_shower=has_shower or filter_by == "Showers",
        brand=brand or None,
        size=size or None,
        equipment_type=equipment_type or None,
    )
    items = await svc.list(filters, sort_by)
    return GymListResponse(items=items, total=len(items))


@router.get(
    "/{gym_id}",
    response_model=GymRead,
    summary="ジム詳細（レビュー投稿者を解決）",
    responses={
        400: {"model": ErrorResponse, "description": "invalid id"},
        404: {"model": ErrorResponse, "description": "Not Found"},
    },
)
async def get_gym(
    gym_id: str = Path(..., description="ジムID"),
    svc: GymService = Depends(get_gym_service),
):
    return await svc.get(gym_id)


@router.post(
    "",
    response_model=GymRead,
    status_code=status.HTTP_201_CREATED,
    summary="ジム登録",
    description="名前が 'Gym Master' の場合は large / シャワーあり に補正されます。",
    responses={400: {"model": ValidationErrorResponse, "description": "validation error"}},
)
async def create_gym(
    payload: dict[str, Any] = Body(...),
    svc: GymService = Depends(get_gym_service),
):
    return await svc.create(payload)


@router.put(
    "/{gym_id}",
    response_model=GymRead,
    summary="ジム部分更新",
    responses={
        400: {"model": ValidationErrorResponse, "description": "validation error / invalid id"},
        404: {"model": ErrorResponse, "description": "Not Found"},
    },
)
async def update_gym(
    gym_id: str = Path(..., description="ジムID"),
    payload: dict[str, Any] = Body(...),
    svc: GymService = Depends(get_gym_service),
):
    return await svc.update(gym_id, payload)


@router.delete(
    "/{gym_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="ジム削除",
    description="ユーザーのお気に入り・レビューからは削除されません。",
    responses={
        400: {"model": ErrorResponse, "description": "invalid id"},
        404: {"model": ErrorResponse, "description": "Not Found"},
    },
)
async def delete_gym(
    gym_id: str = Path(..., description="ジムID"),
    svc: GymService = Depends(get_gym_service),
):
    await svc.delete(gym_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{gym_id}/reviews",
    response_model=GymRead,
    status_code=status.HTTP_201_CREATED,
    summary="レビュー投稿（1ユーザー1件）",
    responses={
        400: {"model": ValidationErrorResponse, "description": "validation error / invalid id"},
        404: {"model": ErrorResponse, "description": "user or gym not found"},
        409: {"model": ErrorResponse, "description": "already reviewed"},
    },
)
async def add_review(
    gym_id: str = Path(..., description="ジムID"),
    payload: dict[str, Any] = Body(...),
    svc: GymService = Depends(get_gym_service),
):
    return await svc.add_review(
        gym_id,
        user_id=payload.get("user_id"),
        rating=payload.get("rating"),
        comment=payload.get("comment"),
    )
