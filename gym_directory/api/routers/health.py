"""Liveness and readiness probes."""

from fastapi import APIRouter, Depends

from gym_directory.api.deps import get_health_service
from gym_directory.schemas.common import ErrorResponse, OkResponse, ReadyResponse
from gym_directory.services.health import HealthService

router = APIRouter(tags=["health"])


@router.get(
    "/healthz",
    response_model=OkResponse,
    summary="Liveness probe",
    description="プロセスが応答できるかだけを確認（ストアには触れない）",
)
async def healthz():
    return {"ok": True}


@router.get(
    "/readyz",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="起動時に選ばれたストアへ ping を送り、そのバックエンド名を返す（失敗時は503）",
    responses={503: {"model": ErrorResponse, "description": "store unavailable"}},
)
async def readyz(svc: HealthService = Depends(get_health_service)):
    return await svc.ok()
