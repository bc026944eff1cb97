from __future__ import annotations

from typing import Dict, List, Set

from .models import Finding, ModuleDescriptor
from .registry import ModuleRegistry


def _public_closure(name: str, registry: ModuleRegistry) -> Set[str]:
    # Unregistered modules and cycles are skipped; resolution reports those.
    out: Set[str] = set()
    stack = [name]
    while stack:
        current = registry.lookup(stack.pop())
        if current is None:
            continue
        for dep in current.public_dependencies:
            if dep not in out:
                out.add(dep)
                stack.append(dep)
    return out


def diagnose(descriptor: ModuleDescriptor, registry: ModuleRegistry) -> List[Finding]:
    """Non-fatal observations about a descriptor relative to a registry."""
    findings: List[Finding] = []

    for dep in descriptor.disabled_dependencies:
        if dep in registry:
            findings.append(Finding(
                code="module.disabled_available",
                severity="info",
                message=f"Disabled dependency '{dep}' is available but unused.",
                data={"module": descriptor.name, "dependency": dep},
            ))
        else:
            findings.append(Finding(
                code="module.disabled_unknown",
                severity="warn",
                message=f"Disabled dependency '{dep}' is not registered.",
                data={"module": descriptor.name, "dependency": dep},
            ))

    declared = descriptor.dependencies
    closures: Dict[str, Set[str]] = {d: _public_closure(d, registry) for d in declared}
    for dep in declared:
        via = [other for other in declared if other != dep and dep in closures[other]]
        if via:
            findings.append(Finding(
                code="module.redundant_dependency",
                severity="info",
                message=f"Dependency '{dep}' is already visible through '{via[0]}'.",
                data={"module": descriptor.name, "dependency": dep, "via": via},
            ))

    return findings
