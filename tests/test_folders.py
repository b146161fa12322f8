import os
from pathlib import Path

import pytest

from folders import Folder, get_folder, is_processable


@pytest.mark.parametrize("name", ["legacy.xls", "book.xlsx", "macros.xlsm", "dir/nested.xlsx"])
def test_spreadsheet_extensions_are_processable(name: str) -> None:
    assert is_processable(name)


@pytest.mark.parametrize("name", ["notes.txt", "data.csv", "binary.xlsb", "README", "xlsx"])
def test_other_extensions_are_skipped(name: str) -> None:
    assert not is_processable(name)


def test_extension_case_follows_host_os() -> None:
    case_insensitive = os.path.normcase("A") == "a"
    assert is_processable(Path("REPORT.XLSX")) == case_insensitive


def test_folder_lists_files_and_subfolders_sorted(tmp_path: Path) -> None:
    for name in ["b.xlsx", "a.txt"]:
        (tmp_path / name).write_text("", encoding="utf-8")
    for name in ["zeta", "alpha"]:
        (tmp_path / name).mkdir()

    folder = Folder(tmp_path)

    assert [p.name for p in folder.files] == ["a.txt", "b.xlsx"]
    assert [f.name for f in folder.subfolders] == ["alpha", "zeta"]
    assert all(isinstance(f, Folder) for f in folder.subfolders)


def test_get_folder_resolves_directory(tmp_path: Path) -> None:
    assert get_folder(str(tmp_path)).path == tmp_path


def test_get_folder_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_folder(tmp_path / "missing")


def test_get_folder_rejects_file(tmp_path: Path) -> None:
    target = tmp_path / "book.xlsx"
    target.write_bytes(b"")
    with pytest.raises(NotADirectoryError):
        get_folder(target)
