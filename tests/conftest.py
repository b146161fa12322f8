from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest


class FakeWorkbook:
    def __init__(self, app: "FakeApplication", path: str, sheets: List[str]):
        self.app = app
        self.path = path
        self.name = Path(path).name
        self.worksheets = list(sheets)

    def save(self) -> None:
        self.app.calls.append(("save", self.name))
        error = self.app.save_errors.get(self.name)
        if error is not None:
            raise error

    def close(self) -> None:
        self.app.calls.append(("close", self.name))
        error = self.app.close_errors.get(self.name)
        if error is not None:
            raise error


class FakeApplication:
    """Records every open/save/close by file name."""

    def __init__(
        self,
        *,
        sheets: Optional[Dict[str, List[str]]] = None,
        open_errors: Optional[Dict[str, Exception]] = None,
        save_errors: Optional[Dict[str, Exception]] = None,
        close_errors: Optional[Dict[str, Exception]] = None,
    ):
        self.sheets = sheets or {}
        self.open_errors = open_errors or {}
        self.save_errors = save_errors or {}
        self.close_errors = close_errors or {}
        self.calls: List[tuple] = []
        self.quit_count = 0

    def open(self, path: str) -> FakeWorkbook:
        name = Path(path).name
        self.calls.append(("open", name))
        error = self.open_errors.get(name)
        if error is not None:
            raise error
        return FakeWorkbook(self, path, self.sheets.get(name, ["Sheet1"]))

    def quit(self) -> None:
        self.quit_count += 1

    def opened(self) -> List[str]:
        return [name for action, name in self.calls if action == "open"]

    def count(self, action: str, name: str) -> int:
        return self.calls.count((action, name))


def make_files(root: Path, names: Iterable[str]) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")


@pytest.fixture
def fake_app() -> FakeApplication:
    return FakeApplication()


@pytest.fixture
def make_tree(tmp_path: Path):
    def _make(*names: str) -> Path:
        make_files(tmp_path, names)
        return tmp_path

    return _make
