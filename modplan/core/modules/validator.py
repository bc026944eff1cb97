from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple, Union

from pydantic import ValidationError

from modplan.core.errors import (
    ConfigError,
    DuplicateDependency,
    InvalidModuleName,
    SelfDependency,
    UnrecognizedOption,
)

from .models import (
    LANGUAGE_STANDARD_ALIASES,
    PCH_MODE_ALIASES,
    LanguageStandard,
    ModuleDescriptor,
    ModuleRecord,
    PCHMode,
)


def _normalize_option(option: str, value: Any, enum_cls, aliases, *, module: Optional[str]) -> str:
    if not isinstance(value, str):
        raise UnrecognizedOption(option, value, module=module)
    key = value.strip().lower()
    # Qualified engine spellings: "CppStandardVersion.Cpp20", "PCHUsageMode.NoPCHs"
    for candidate in (key, key.rsplit(".", 1)[-1]):
        for member in enum_cls:
            if member.value == candidate:
                return member.value
        if candidate in aliases:
            return aliases[candidate].value
    raise UnrecognizedOption(option, value, module=module)


def _clean(names: Iterable[str]) -> Tuple[str, ...]:
    return tuple(n.strip() for n in names if n and n.strip())


def validate(descriptor: ModuleDescriptor) -> ModuleDescriptor:
    """Check a descriptor for internal consistency and return a normalized copy.

    Raises UnrecognizedOption, InvalidModuleName, SelfDependency or
    DuplicateDependency. Pure: the input is never modified.
    """
    name = descriptor.name.strip() if isinstance(descriptor.name, str) else ""
    module = name or None

    language_standard = _normalize_option(
        "language_standard",
        descriptor.language_standard,
        LanguageStandard,
        LANGUAGE_STANDARD_ALIASES,
        module=module,
    )
    pch_mode = _normalize_option(
        "pch_mode",
        descriptor.pch_mode,
        PCHMode,
        PCH_MODE_ALIASES,
        module=module,
    )

    if not name:
        raise InvalidModuleName(descriptor.name)

    public = _clean(descriptor.public_dependencies)
    private = _clean(descriptor.private_dependencies)
    disabled = _clean(descriptor.disabled_dependencies)

    combined = public + private + disabled
    if name in combined:
        raise SelfDependency(name)

    seen: Set[str] = set()
    for dep in combined:
        if dep in seen:
            raise DuplicateDependency(dep, module=name)
        seen.add(dep)

    return ModuleDescriptor(
        name=name,
        language_standard=language_standard,
        pch_mode=pch_mode,
        public_dependencies=public,
        private_dependencies=private,
        disabled_dependencies=disabled,
    )


def validate_record(record: Union[ModuleRecord, Mapping[str, Any]]) -> ModuleDescriptor:
    """Validate a deserialized record (model instance or plain mapping)."""
    if not isinstance(record, ModuleRecord):
        try:
            record = ModuleRecord.model_validate(record)
        except ValidationError as e:
            name = record.get("name") if isinstance(record, Mapping) else None
            raise ConfigError(
                f"Malformed module record: {e.error_count()} schema error(s)",
                module=name if isinstance(name, str) else None,
            ) from e
    return validate(record.to_descriptor())


def recognized_options() -> dict[str, List[str]]:
    return {
        "language_standard": [m.value for m in LanguageStandard],
        "pch_mode": [m.value for m in PCHMode],
    }
