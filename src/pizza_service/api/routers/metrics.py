from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from pizza_service.auth.deps import require_roles
from pizza_service.auth.models import RoleKind
from pizza_service.observability.metrics import AuthMetrics, auth_metrics

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.get("/auth", dependencies=[Depends(require_roles(RoleKind.admin))])
async def auth_counters(metrics: AuthMetrics = Depends(auth_metrics)) -> dict[str, Any]:
    return metrics.snapshot()
