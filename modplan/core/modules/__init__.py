from .models import Finding, LanguageStandard, ModuleDescriptor, ModuleRecord, PCHMode
from .registry import ModuleRegistry
from .validator import validate, validate_record
from .loader import load_module_records, load_registry
from .diagnostics import diagnose

__all__ = [
    "Finding",
    "LanguageStandard",
    "ModuleDescriptor",
    "ModuleRecord",
    "PCHMode",
    "ModuleRegistry",
    "validate",
    "validate_record",
    "load_module_records",
    "load_registry",
    "diagnose",
]
