from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field


class LanguageStandard(str, Enum):
    DEFAULT = "default"
    CPP14 = "cpp14"
    CPP17 = "cpp17"
    CPP20 = "cpp20"
    LATEST = "latest"


class PCHMode(str, Enum):
    DISABLED = "disabled"
    EXPLICIT = "explicit"
    SHARED = "shared"
    EXPLICIT_OR_SHARED = "explicit_or_shared"


# Engine-style spellings seen in build descriptors, keyed lowercase.
LANGUAGE_STANDARD_ALIASES: Dict[str, LanguageStandard] = {
    "c++14": LanguageStandard.CPP14,
    "c++17": LanguageStandard.CPP17,
    "c++20": LanguageStandard.CPP20,
}

PCH_MODE_ALIASES: Dict[str, PCHMode] = {
    "nopchs": PCHMode.DISABLED,
    "nosharedpchs": PCHMode.EXPLICIT,
    "usesharedpchs": PCHMode.SHARED,
    "useexplicitorsharedpchs": PCHMode.EXPLICIT_OR_SHARED,
    "explicitorshared": PCHMode.EXPLICIT_OR_SHARED,
}


@dataclass(frozen=True)
class ModuleDescriptor:
    name: str
    language_standard: str = LanguageStandard.DEFAULT.value
    pch_mode: str = PCHMode.EXPLICIT_OR_SHARED.value
    public_dependencies: Tuple[str, ...] = ()
    private_dependencies: Tuple[str, ...] = ()
    # Inactive entries: kept for reporting, never traversed.
    disabled_dependencies: Tuple[str, ...] = ()

    @property
    def dependencies(self) -> Tuple[str, ...]:
        """Active dependencies in traversal order: public first, then private."""
        return self.public_dependencies + self.private_dependencies

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "language_standard": self.language_standard,
            "pch_mode": self.pch_mode,
            "public_dependencies": list(self.public_dependencies),
            "private_dependencies": list(self.private_dependencies),
            "disabled_dependencies": list(self.disabled_dependencies),
        }


class DependencyGroup(BaseModel):
    # Named block of dependencies, e.g. "Header stubs"; flattened on load.
    group: Optional[str] = None
    modules: List[str] = Field(default_factory=list)


DependencyEntry = Union[str, DependencyGroup]


def _flatten(entries: List[DependencyEntry]) -> Tuple[str, ...]:
    out: List[str] = []
    for e in entries:
        if isinstance(e, DependencyGroup):
            out.extend(e.modules)
        else:
            out.append(e)
    return tuple(out)


class ModuleRecord(BaseModel):
    """Deserialized configuration record for one module.

    Option fields stay plain strings so unknown values reach the validator.
    """

    name: str
    language_standard: str = LanguageStandard.DEFAULT.value
    pch_mode: str = PCHMode.EXPLICIT_OR_SHARED.value
    public_dependencies: List[DependencyEntry] = Field(default_factory=list)
    private_dependencies: List[DependencyEntry] = Field(default_factory=list)
    disabled_dependencies: List[DependencyEntry] = Field(default_factory=list)
    description: Optional[str] = None

    def to_descriptor(self) -> ModuleDescriptor:
        return ModuleDescriptor(
            name=self.name,
            language_standard=self.language_standard,
            pch_mode=self.pch_mode,
            public_dependencies=_flatten(self.public_dependencies),
            private_dependencies=_flatten(self.private_dependencies),
            disabled_dependencies=_flatten(self.disabled_dependencies),
        )


@dataclass(frozen=True)
class Finding:
    code: str
    severity: str  # "info" | "warn" | "error"
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity,
            "message": self.message,
            "data": dict(self.data),
        }
