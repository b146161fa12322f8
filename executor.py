"""
Batch executor: opens every spreadsheet in a folder tree and runs the
pre-sheet / per-sheet / post-sheet hooks on it.

- One spreadsheet application is reused for every file; the caller quits it
- Failures are isolated per file and collected into counters and an error log
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from config import RECURSIVE, SAVE_ON_SUCCESS, SELECTION_CANCELLED_MESSAGE
from folder_picker import select_folder
from folders import Folder, get_folder, is_processable
from hooks import PostHook, PreHook, SheetHook
from spreadsheet_engine import create_application


# -----------------------------
# Data model
# -----------------------------
@dataclass
class FileResult:
    ok: bool
    path: str
    elapsed_ms: int = 0
    sheet_count: int = 0
    saved: bool = False

    # error
    error_type: str = ""
    error_message: str = ""


def _safe_str(x: Any) -> str:
    try:
        return "" if x is None else str(x)
    except Exception:
        return repr(x)


def _error_text(exc: BaseException) -> str:
    return _safe_str(exc) or type(exc).__name__


# -----------------------------
# Executor
# -----------------------------
class ExcelProcessExecutor:
    """Run three processing hooks over every spreadsheet in a folder.

    Hooks are called as ``pre_process_sheet(executor, workbook)``,
    ``process_sheet(executor, workbook, worksheet)`` and
    ``post_process_sheet(executor, workbook)``. Any of them may be None.
    """

    def __init__(
        self,
        pre_process_sheet: Optional[PreHook] = None,
        process_sheet: Optional[SheetHook] = None,
        post_process_sheet: Optional[PostHook] = None,
        save_on_success: Optional[bool] = None,
        *,
        recursive: Optional[bool] = None,
        application=None,
        folder_picker: Optional[Callable[[], Optional[str]]] = None,
        verbose: bool = False,
    ):
        """Initialize executor

        Args:
            pre_process_sheet: Called once per workbook before the sheets
            process_sheet: Called for every worksheet of the workbook
            post_process_sheet: Called once per workbook after the sheets
            save_on_success: Save workbooks that were processed without error
            recursive: Default for visiting subfolders
            application: Started spreadsheet application (built from config if None)
            folder_picker: Returns a folder path, or None when cancelled (tkinter dialog if None)
            verbose: Print one status line per file
        """
        self.pre_process_sheet = pre_process_sheet
        self.process_sheet = process_sheet
        self.post_process_sheet = post_process_sheet
        self.save_on_success = SAVE_ON_SUCCESS if save_on_success is None else save_on_success
        self.recursive = RECURSIVE if recursive is None else recursive
        self.folder_picker = folder_picker or select_folder
        self.verbose = verbose

        self.application = application if application is not None else create_application()

        # Run accumulator
        self.success_count = 0
        self.error_count = 0
        self.error_log: List[Tuple[str, str]] = []
        self.cancelled = False

    def __enter__(self) -> "ExcelProcessExecutor":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.quit()

    # -----------------------------
    # Entry points
    # -----------------------------
    def run_on_folder(self, path: Union[str, Path], recursive: Optional[bool] = None) -> None:
        """Process the spreadsheets in the folder at ``path``."""
        self.run_on_folder_ref(get_folder(path), recursive)

    def run_on_folder_ref(self, folder: Folder, recursive: Optional[bool] = None) -> None:
        """Process ``folder``'s own files, then its subfolders when recursive."""
        if self.application is None:
            raise RuntimeError("Spreadsheet application has been quit; create a new executor.")
        recursive = self.recursive if recursive is None else recursive
        self.cancelled = False

        for path in folder.files:
            if is_processable(path):
                self.process_file(path)

        if recursive:
            for subfolder in folder.subfolders:
                self.run_on_folder_ref(subfolder, recursive)

    def run_interactive(self, recursive: Optional[bool] = None) -> None:
        """Ask for a folder with the picker and process it.

        A cancelled selection processes nothing and leaves the counters alone;
        ``cancelled`` is set and ``error_message`` reports the cancellation.
        """
        folder_path = self.folder_picker()
        if not folder_path:
            self.cancelled = True
            if self.verbose:
                print(f"[CANCEL] {SELECTION_CANCELLED_MESSAGE}")
            return
        self.run_on_folder(folder_path, recursive)

    def quit(self) -> None:
        """Release the spreadsheet application. Safe to call more than once."""
        if self.application is None:
            return
        try:
            self.application.quit()
        finally:
            self.application = None

    # -----------------------------
    # Per-file pipeline
    # -----------------------------
    def process_file(self, path: Union[str, Path]) -> FileResult:
        """Open, run hooks, save and close one workbook; record the outcome."""
        result = self._run_pipeline(str(path))
        self._record(result)
        return result

    def _run_pipeline(self, path: str) -> FileResult:
        t0 = time.time()
        result = FileResult(ok=False, path=path)
        workbook = None
        try:
            workbook = self.application.open(path)

            if self.pre_process_sheet is not None:
                self.pre_process_sheet(self, workbook)

            for worksheet in workbook.worksheets:
                if self.process_sheet is not None:
                    self.process_sheet(self, workbook, worksheet)
                result.sheet_count += 1

            if self.post_process_sheet is not None:
                self.post_process_sheet(self, workbook)

            if self.save_on_success:
                workbook.save()
                result.saved = True

            result.ok = True
        except Exception as e:
            result.error_type = type(e).__name__
            result.error_message = _error_text(e)
        finally:
            if workbook is not None:
                try:
                    workbook.close()
                except Exception as e:
                    close_message = f"close failed: {_error_text(e)}"
                    if result.ok:
                        result.ok = False
                        result.error_type = type(e).__name__
                        result.error_message = close_message
                    else:
                        result.error_message = f"{result.error_message}; {close_message}"
            result.elapsed_ms = int((time.time() - t0) * 1000)
        return result

    def _record(self, result: FileResult) -> None:
        if result.ok:
            self.success_count += 1
            if self.verbose:
                print(f"[OK] {result.path} ({result.elapsed_ms}ms, sheets={result.sheet_count})")
        else:
            self.error_count += 1
            self.error_log.append((result.path, result.error_message))
            if self.verbose:
                print(f"[FAIL] {result.path} - {result.error_message}")

    # -----------------------------
    # Accumulator
    # -----------------------------
    @property
    def error_message(self) -> str:
        """Newline-joined ``<path>:<message>`` entries, or the cancellation message."""
        if self.cancelled:
            return SELECTION_CANCELLED_MESSAGE
        return "\n".join(f"{path}:{message}" for path, message in self.error_log)

    @property
    def processed_count(self) -> int:
        return self.success_count + self.error_count

    def reset(self) -> None:
        """Clear counters and the error log before another run."""
        self.success_count = 0
        self.error_count = 0
        self.error_log = []
        self.cancelled = False
