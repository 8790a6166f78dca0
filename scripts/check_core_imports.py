#!/usr/bin/env python3
"""
Fail if the client core imports the stub or test-only modules.
Checks the core modules under src/triglav_consumer/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = REPO_ROOT / "src" / "triglav_consumer"

CORE_MODULES = ("api.py", "client.py", "errors.py", "models.py", "token_store.py")

FORBIDDEN_PREFIXES = (
    "pytest",
    "respx",
    "triglav_consumer.stub",
)

# relative imports that resolve to forbidden package modules
FORBIDDEN_RELATIVE = ("stub",)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if node.level:
                if mod in FORBIDDEN_RELATIVE:
                    errors.append(f"{path}: forbidden import '.{mod}'")
            elif mod and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for name in CORE_MODULES:
        violations.extend(scan_file(PACKAGE_DIR / name))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
