#!/usr/bin/env python3
"""
Validate three-layer architecture dependencies.

Rules:
- c1 imports from c1 only (plus stdlib + external)
- c2 imports from c2 and c1 only
- c3 imports from c3, c2 and c1 only
- Nothing below the application layer imports taskboard.server

No circular dependencies allowed.
"""

import ast
import sys
from pathlib import Path
from typing import List, Optional, Tuple

PACKAGE = "taskboard"
LAYER_RANK = {"c1": 1, "c2": 2, "c3": 3}


def extract_imports(file_path: Path) -> List[str]:
    """Extract all taskboard imports from a Python file."""
    try:
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    except SyntaxError as e:
        print(f"⚠️  Syntax error in {file_path}: {e}")
        return []

    imports = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == PACKAGE or alias.name.startswith(PACKAGE + "."):
                    imports.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0 and node.module and node.module.startswith(PACKAGE):
                imports.append(node.module)

    return imports


def get_layer(module_path: str) -> Optional[str]:
    """Layer of a dotted module path (``taskboard.c2_x.y`` -> ``c2``), None outside c1-c3."""
    parts = module_path.split(".")
    if len(parts) < 2:
        return None
    prefix = parts[1][:2]
    return prefix if prefix in LAYER_RANK else None


def validate_layer_dependencies(package_dir: Path = Path(PACKAGE)) -> Tuple[bool, List[str]]:
    """Validate that layer dependencies follow the rules."""
    violations = []

    if not package_dir.exists():
        return False, [f"Package directory not found: {package_dir}"]

    for py_file in sorted(package_dir.rglob("*.py")):
        relative = py_file.relative_to(package_dir.parent).with_suffix("")
        file_layer = get_layer(".".join(relative.parts))
        if file_layer is None:
            continue

        for imported_module in extract_imports(py_file):
            if imported_module == f"{PACKAGE}.server":
                violations.append(f"{py_file}: {file_layer} cannot import the application ({imported_module})")
                continue

            imported_layer = get_layer(imported_module)
            if imported_layer is not None and LAYER_RANK[imported_layer] > LAYER_RANK[file_layer]:
                violations.append(f"{py_file}: {file_layer} cannot import from {imported_layer} ({imported_module})")

    return len(violations) == 0, violations


def main():
    """Run architecture validation."""
    print("=" * 70)
    print("Three-Layer Architecture Validator")
    print("=" * 70)
    print()

    success, violations = validate_layer_dependencies()

    if success:
        print("✅ All layer dependencies are valid!")
        print()
        print("Layer rules:")
        print("  - c1 imports: c1 + stdlib + external packages")
        print("  - c2 imports: c1 + c2 + stdlib + external packages")
        print("  - c3 imports: c1 + c2 + c3 + stdlib + external packages")
        return 0
    else:
        print(f"❌ Found {len(violations)} layer dependency violations:")
        print()
        for violation in violations:
            print(f"  - {violation}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
