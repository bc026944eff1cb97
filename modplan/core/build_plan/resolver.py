from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, Iterator, List, Tuple

from modplan.core.errors import CyclicDependency, MissingModule, ResolveError
from modplan.core.modules.models import ModuleDescriptor
from modplan.core.modules.registry import ModuleRegistry
from modplan.core.observability.metrics import inc_named, observe_resolution

from .models import BuildPlan, Edge, ModuleSettings

log = logging.getLogger("modplan.resolver")

_IN_PROGRESS = 1
_DONE = 2

_END = object()


def resolve(root: str, registry: ModuleRegistry) -> BuildPlan:
    """Compute the build plan for `root`.

    Depth-first over public then private dependencies (declaration order),
    post-order append, so every dependency precedes its dependent. Disabled
    dependencies are not traversed. Raises CyclicDependency or MissingModule;
    a partial plan is never returned.
    """
    t0 = time.perf_counter()
    try:
        plan = _resolve(root, registry)
    except ResolveError as e:
        observe_resolution("error", time.perf_counter() - t0)
        inc_named(e.code)
        log.warning("resolve root=%s failed: %s", root, e)
        raise

    observe_resolution("ok", time.perf_counter() - t0)
    log.debug(
        "resolve root=%s modules=%s public_edges=%s private_edges=%s",
        root,
        len(plan.order),
        len(plan.public_edges),
        len(plan.private_edges),
    )
    return plan


def resolve_many(roots: Iterable[str], registry: ModuleRegistry) -> Dict[str, BuildPlan]:
    return {r: resolve(r, registry) for r in roots}


def _resolve(root: str, registry: ModuleRegistry) -> BuildPlan:
    root_desc = registry.lookup(root)
    if root_desc is None:
        raise MissingModule(root)

    state: Dict[str, int] = {root: _IN_PROGRESS}
    path: List[str] = [root]
    stack: List[Tuple[ModuleDescriptor, Iterator[str]]] = [
        (root_desc, iter(root_desc.dependencies))
    ]

    order: List[str] = []
    public_edges: List[Edge] = []
    private_edges: List[Edge] = []
    settings: Dict[str, ModuleSettings] = {}

    while stack:
        desc, deps = stack[-1]
        dep = next(deps, _END)

        if dep is _END:
            stack.pop()
            path.pop()
            state[desc.name] = _DONE
            order.append(desc.name)
            public_edges.extend((desc.name, d) for d in desc.public_dependencies)
            private_edges.extend((desc.name, d) for d in desc.private_dependencies)
            settings[desc.name] = ModuleSettings(
                language_standard=desc.language_standard,
                pch_mode=desc.pch_mode,
            )
            continue

        seen = state.get(dep)
        if seen == _DONE:
            continue
        if seen == _IN_PROGRESS:
            start = path.index(dep)
            raise CyclicDependency(path[start:] + [dep])

        child = registry.lookup(dep)
        if child is None:
            raise MissingModule(dep, requested_by=desc.name)

        state[dep] = _IN_PROGRESS
        path.append(dep)
        stack.append((child, iter(child.dependencies)))

    return BuildPlan(
        root=root,
        order=tuple(order),
        public_edges=tuple(public_edges),
        private_edges=tuple(private_edges),
        settings=settings,
        registry_fingerprint=registry.fingerprint,
    )
