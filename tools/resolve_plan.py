"""Print the build plan for a root module from a descriptor directory.

Needs the modplan package importable: install it with `pip install -e .`,
or run from the repository root as `python -m tools.resolve_plan ROOT`.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from modplan.core.build_plan.resolver import resolve
from modplan.core.errors import ConfigError, ResolveError
from modplan.core.modules.loader import load_registry
from modplan.core.settings import Settings


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("root", help="name of the module to plan")
    p.add_argument("--modules-dir", type=Path, default=None, help="descriptor directory (default: MODPLAN_MODULES_DIR)")
    p.add_argument("--format", choices=("json", "text"), default="text")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    modules_dir = args.modules_dir or Settings.from_env().modules_dir

    registry, warnings = load_registry(modules_dir)
    for w in warnings:
        print(f"warning: {w['message']}", file=sys.stderr)

    try:
        plan = resolve(args.root, registry)
    except (ConfigError, ResolveError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(json.dumps({"plan_id": plan.compute_plan_id(), **plan.to_dict()}, indent=2, sort_keys=True))
    else:
        for i, name in enumerate(plan.order, start=1):
            deps = ", ".join(plan.dependencies_of(name))
            print(f"{i:3d}. {name}" + (f"  <- {deps}" if deps else ""))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
