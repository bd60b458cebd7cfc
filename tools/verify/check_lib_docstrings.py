#!/usr/bin/env python3
"""Check that every public function and class exported by the lib modules carries a docstring."""

from __future__ import annotations

import inspect
import sys
from importlib import import_module
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Tuple

ROOT = Path(__file__).resolve().parent.parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

LIB_DIR = ROOT / "lib" / "py"


def lib_modules() -> List[str]:
    """Dotted names of every module under lib/py, sorted."""
    return sorted(f"lib.py.{p.stem}" for p in LIB_DIR.glob("*.py") if not p.stem.startswith("_"))


def exported_api(module: ModuleType) -> Iterable[Tuple[str, object]]:
    """Yield (name, object) for functions and classes that the module lists in __all__ and defines itself."""
    for name in getattr(module, "__all__", ()):
        obj = getattr(module, name)
        if (inspect.isfunction(obj) or inspect.isclass(obj)) and obj.__module__ == module.__name__:
            yield name, obj


def has_docstring(obj: object) -> bool:
    """True when the object defines its own docstring (not inherited, not the dataclass signature stub)."""
    doc = (obj.__doc__ or "").strip()
    if not doc:
        return False
    if inspect.isclass(obj) and doc.startswith(f"{obj.__name__}("):
        return False
    return True


def missing_docstrings(module_name: str) -> Tuple[List[str], List[str]]:
    module = import_module(module_name)
    documented: List[str] = []
    missing: List[str] = []
    for name, obj in exported_api(module):
        (documented if has_docstring(obj) else missing).append(name)
    return documented, missing


def main() -> int:
    total_pass = 0
    total_fail = 0
    for module_name in lib_modules():
        try:
            documented, missing = missing_docstrings(module_name)
        except Exception as exc:  # pragma: no cover - harness logging only
            print(f"[verify] FAIL {module_name} import error: {exc.__class__.__name__}: {exc}")
            total_fail += 1
            continue
        for name in missing:
            print(f"[verify] FAIL {module_name}.{name} docstring missing")
        print(f"[verify] {'FAIL' if missing else 'PASS'} {module_name} documented={len(documented)} missing={len(missing)}")
        total_pass += len(documented)
        total_fail += len(missing)

    status = "FAIL" if total_fail else "PASS"
    print(f"[verify] {status} summary: {total_pass} documented, {total_fail} missing")
    return 1 if total_fail else 0


if __name__ == "__main__":
    sys.exit(main())
