from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from modplan.core.observability.metrics import inc_named
from modplan.core.settings import Settings

router = APIRouter()


@router.get("/health/live")
def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/health/ready")
def ready():
    """
    Ready when the configured modules directory exists.
    """
    inc_named("health_ready")
    settings = Settings.from_env()

    if not settings.modules_dir.is_dir():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": [f"missing_modules_dir:{settings.modules_dir}"]},
        )

    return {"status": "ready"}
