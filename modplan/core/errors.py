from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class ConfigError(ValueError):
    """A module descriptor is internally inconsistent or malformed."""

    code = "config.invalid"

    def __init__(self, message: str, *, module: Optional[str] = None):
        super().__init__(message)
        self.module = module

    def context(self) -> Dict[str, Any]:
        return {"module": self.module}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": str(self), **self.context()}


class DuplicateDependency(ConfigError):
    code = "config.duplicate_dependency"

    def __init__(self, name: str, *, module: Optional[str] = None):
        super().__init__(f"Dependency '{name}' is declared more than once", module=module)
        self.name = name

    def context(self) -> Dict[str, Any]:
        return {"module": self.module, "name": self.name}


class SelfDependency(ConfigError):
    code = "config.self_dependency"

    def __init__(self, name: str):
        super().__init__(f"Module '{name}' lists itself as a dependency", module=name)
        self.name = name

    def context(self) -> Dict[str, Any]:
        return {"module": self.module, "name": self.name}


class UnrecognizedOption(ConfigError):
    code = "config.unrecognized_option"

    def __init__(self, option: str, value: Any, *, module: Optional[str] = None):
        super().__init__(f"Unrecognized value {value!r} for option '{option}'", module=module)
        self.option = option
        self.value = value

    def context(self) -> Dict[str, Any]:
        return {"module": self.module, "option": self.option, "value": self.value}


class InvalidModuleName(ConfigError):
    code = "config.invalid_module_name"

    def __init__(self, name: Any):
        super().__init__(f"Module name must be a non-empty string, got {name!r}")
        self.name = name

    def context(self) -> Dict[str, Any]:
        return {"module": None, "name": self.name}


class DescriptorFileError(ConfigError):
    code = "config.descriptor_file"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid module descriptor file {path}: {reason}")
        self.path = path
        self.reason = reason

    def context(self) -> Dict[str, Any]:
        return {"module": None, "path": self.path, "reason": self.reason}


class ResolveError(Exception):
    """Resolution of a root module (or population of a registry) failed."""

    code = "resolve.failed"

    def context(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": str(self), **self.context()}


class CyclicDependency(ResolveError):
    code = "resolve.cyclic_dependency"

    def __init__(self, path: Sequence[str]):
        self.path = tuple(path)
        super().__init__("Circular module dependency detected: " + "→".join(self.path))

    def context(self) -> Dict[str, Any]:
        return {"path": list(self.path)}


class MissingModule(ResolveError):
    code = "resolve.missing_module"

    def __init__(self, name: str, requested_by: Optional[str] = None):
        self.name = name
        self.requested_by = requested_by
        if requested_by is None:
            msg = f"Module '{name}' is not registered"
        else:
            msg = f"Module '{name}' required by '{requested_by}' is not registered"
        super().__init__(msg)

    def context(self) -> Dict[str, Any]:
        return {"name": self.name, "requested_by": self.requested_by}


class DuplicateModule(ResolveError):
    code = "resolve.duplicate_module"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Module '{name}' is already registered")

    def context(self) -> Dict[str, Any]:
        return {"name": self.name}


class RegistryFrozen(ResolveError):
    code = "resolve.registry_frozen"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot register '{name}': registry population is complete")

    def context(self) -> Dict[str, Any]:
        return {"name": self.name}
