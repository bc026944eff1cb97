from .models import BuildPlan, ModuleSettings
from .resolver import resolve, resolve_many

__all__ = [
    "BuildPlan",
    "ModuleSettings",
    "resolve",
    "resolve_many",
]
