from __future__ import annotations

from typing import Dict, Type, Union

from modplan.core.errors import (
    ConfigError,
    CyclicDependency,
    DuplicateModule,
    MissingModule,
    RegistryFrozen,
    ResolveError,
)

DomainError = Union[ConfigError, ResolveError]

_STATUS: Dict[Type[Exception], int] = {
    MissingModule: 404,
    CyclicDependency: 409,
    DuplicateModule: 409,
    RegistryFrozen: 409,
}


def status_for(err: DomainError) -> int:
    if isinstance(err, ConfigError):
        return 422
    return _STATUS.get(type(err), 400)

