"""
Local filesystem access for the batch executor
"""

import os
from pathlib import Path
from typing import List, Union

from config import SPREADSHEET_EXTENSIONS

_NORMALIZED_EXTENSIONS = {os.path.normcase(ext) for ext in SPREADSHEET_EXTENSIONS}


def is_processable(path: Union[str, Path]) -> bool:
    """True if ``path`` has a recognised spreadsheet extension.

    Extensions are compared with the host OS case rules (case-insensitive on
    Windows, case-sensitive elsewhere).
    """
    return os.path.normcase(Path(path).suffix) in _NORMALIZED_EXTENSIONS


class Folder:
    """A resolved directory: its direct files and direct subfolders."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Folder({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    def _entries(self) -> List[Path]:
        return sorted(self.path.iterdir(), key=lambda p: p.name)

    @property
    def files(self) -> List[Path]:
        return [p for p in self._entries() if p.is_file()]

    @property
    def subfolders(self) -> List["Folder"]:
        return [Folder(p) for p in self._entries() if p.is_dir()]


def get_folder(path: Union[str, Path]) -> Folder:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Folder not found: {p}")
    if not p.is_dir():
        raise NotADirectoryError(f"Not a folder: {p}")
    return Folder(p)
