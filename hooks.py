"""Hook loading for the batch executor."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib import import_module
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional

PreHook = Callable[[Any, Any], None]
SheetHook = Callable[[Any, Any, Any], None]
PostHook = Callable[[Any, Any], None]

HOOK_NAMES = ("pre_process_sheet", "process_sheet", "post_process_sheet")


class HookLoadError(RuntimeError):
    """Raised when hooks cannot be imported from the given module."""


@dataclass(frozen=True)
class HookSet:
    pre_process_sheet: Optional[PreHook] = None
    process_sheet: Optional[SheetHook] = None
    post_process_sheet: Optional[PostHook] = None


def load_hooks(module_name: str) -> HookSet:
    """Import ``module_name`` (dotted name or path to a .py file) and collect
    the three processing hooks.

    The module may define any of ``pre_process_sheet(executor, workbook)``,
    ``process_sheet(executor, workbook, worksheet)`` and
    ``post_process_sheet(executor, workbook)``; missing ones are left as None.
    """
    if module_name.endswith(".py") and Path(module_name).is_file():
        module = _load_from_file(Path(module_name))
        module_name = module.__name__
    else:
        try:
            module = import_module(module_name)
        except ImportError as exc:
            raise HookLoadError(f"Hook module '{module_name}' could not be imported: {exc}") from exc

    found = {}
    for name in HOOK_NAMES:
        func = getattr(module, name, None)
        if func is None:
            continue
        if not callable(func):
            raise HookLoadError(f"Hook '{module_name}.{name}' is not callable")
        found[name] = func

    if not found:
        raise HookLoadError(
            f"Hook module '{module_name}' must define at least one of: {', '.join(HOOK_NAMES)}"
        )
    return HookSet(**found)


def _load_from_file(path: Path) -> ModuleType:
    module_name = f"excel_hooks_{path.stem}"
    spec = spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise HookLoadError(f"Hook file '{path}' could not be loaded")
    module = module_from_spec(spec)
    # dataclasses and pickle look the module up by name while it executes
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(spec.name, None)
        raise HookLoadError(f"Hook file '{path}' failed to import: {exc}") from exc
    return module
