import sys
from pathlib import Path

import pytest

from hooks import HookLoadError, HookSet, load_hooks


def _write(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_load_hooks_from_file(tmp_path: Path) -> None:
    hook_file = _write(
        tmp_path / "file_hooks.py",
        "def pre_process_sheet(executor, workbook):\n"
        "    return 'pre'\n"
        "\n"
        "def process_sheet(executor, workbook, worksheet):\n"
        "    return 'sheet'\n",
    )

    hooks = load_hooks(str(hook_file))

    assert isinstance(hooks, HookSet)
    assert hooks.pre_process_sheet(None, None) == "pre"
    assert hooks.process_sheet(None, None, None) == "sheet"
    assert hooks.post_process_sheet is None


def test_load_hooks_by_module_name(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path / "named_hooks_module.py",
        "def post_process_sheet(executor, workbook):\n"
        "    return 'post'\n",
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    hooks = load_hooks("named_hooks_module")

    assert hooks.post_process_sheet(None, None) == "post"
    assert hooks.pre_process_sheet is None


def test_missing_module_raises() -> None:
    with pytest.raises(HookLoadError):
        load_hooks("definitely_not_a_hooks_module")


def test_module_without_hooks_raises(tmp_path: Path) -> None:
    hook_file = _write(tmp_path / "empty_hooks.py", "VALUE = 1\n")

    with pytest.raises(HookLoadError, match="must define"):
        load_hooks(str(hook_file))


def test_non_callable_hook_raises(tmp_path: Path) -> None:
    hook_file = _write(tmp_path / "bad_hooks.py", "process_sheet = 'nope'\n")

    with pytest.raises(HookLoadError, match="not callable"):
        load_hooks(str(hook_file))


def test_hook_file_import_error_is_wrapped(tmp_path: Path) -> None:
    hook_file = _write(tmp_path / "broken_hooks.py", "raise RuntimeError('boom')\n")

    with pytest.raises(HookLoadError, match="boom"):
        load_hooks(str(hook_file))


def test_hook_file_with_dataclass_loads(tmp_path: Path) -> None:
    hook_file = _write(
        tmp_path / "dataclass_hooks.py",
        "from __future__ import annotations\n"
        "\n"
        "from dataclasses import dataclass\n"
        "from typing import ClassVar\n"
        "\n"
        "@dataclass\n"
        "class Stamp:\n"
        "    text: str\n"
        "    count: ClassVar[int] = 0\n"
        "\n"
        "def process_sheet(executor, workbook, worksheet):\n"
        "    return Stamp('done').text\n",
    )

    hooks = load_hooks(str(hook_file))

    assert hooks.process_sheet(None, None, None) == "done"


def test_failed_hook_file_is_not_left_registered(tmp_path: Path) -> None:
    hook_file = _write(tmp_path / "raising_hooks.py", "raise RuntimeError('boom')\n")

    with pytest.raises(HookLoadError):
        load_hooks(str(hook_file))

    assert "excel_hooks_raising_hooks" not in sys.modules
