from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from modplan.core.build_plan.models import BuildPlan
from modplan.core.build_plan.resolver import resolve
from modplan.core.modules.loader import load_registry
from modplan.core.modules.models import ModuleRecord
from modplan.core.modules.registry import ModuleRegistry
from modplan.core.settings import Settings

# ConfigError / ResolveError raised here are shaped by domain_error_handler.
router = APIRouter(prefix="/api/v1/plans", tags=["plans"])


class ResolvePlanRequest(BaseModel):
    root: str
    modules: List[ModuleRecord] = Field(default_factory=list)


def _plan_payload(plan: BuildPlan) -> Dict[str, Any]:
    return {"plan_id": plan.compute_plan_id(), **plan.to_dict()}


@router.post("/resolve")
def resolve_adhoc(req: ResolvePlanRequest) -> Dict[str, Any]:
    """Resolve against a registry built only from the request body."""
    reg = ModuleRegistry()
    for record in req.modules:
        reg.register(record.to_descriptor())
    reg.freeze()
    return _plan_payload(resolve(req.root, reg))


@router.get("/{root}")
def get_plan(root: str) -> Dict[str, Any]:
    settings = Settings.from_env()
    reg, _ = load_registry(settings.modules_dir)
    return _plan_payload(resolve(root, reg))
