from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from modplan.core.modules.diagnostics import diagnose
from modplan.core.modules.loader import load_registry
from modplan.core.modules.models import ModuleRecord
from modplan.core.modules.validator import validate
from modplan.core.settings import Settings

router = APIRouter(prefix="/api/v1/modules", tags=["modules"])


def _registry():
    settings = Settings.from_env()
    return load_registry(settings.modules_dir)


@router.get("")
def list_modules() -> Dict[str, Any]:
    reg, warnings = _registry()
    names = reg.names()
    return {
        "count": len(names),
        "modules": names,
        "fingerprint": reg.fingerprint,
        "warnings": warnings,
    }


@router.post("/validate")
def validate_module(record: ModuleRecord) -> Dict[str, Any]:
    descriptor = validate(record.to_descriptor())
    return {"valid": True, "descriptor": descriptor.to_dict()}


@router.get("/{name}")
def get_module(name: str) -> Dict[str, Any]:
    reg, _ = _registry()
    descriptor = reg.lookup(name)
    if descriptor is None:
        raise HTTPException(status_code=404, detail="Module not found")
    return {
        "descriptor": descriptor.to_dict(),
        "findings": [f.to_dict() for f in diagnose(descriptor, reg)],
    }
