"""
Spreadsheet application handles
- Excel (COM): a single Excel.Application reused for every workbook in a batch
- openpyxl: the same interface without Excel, for .xlsx/.xlsm on any platform

Both expose the interface the executor needs:
  app.open(path) -> workbook
  workbook.worksheets / workbook.save() / workbook.close()
  app.quit()

Dependencies:
  pip install pywin32      (Excel engine, Windows only)
  pip install openpyxl
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional, Union

from openpyxl import load_workbook

try:
    import pythoncom
    import win32com.client as win32
except Exception:  # pragma: no cover - handled by runtime platform checks
    pythoncom = None
    win32 = None

from config import (
    ENGINE_COM,
    ENGINE_OPENPYXL,
    EXCEL_DISABLE_MACROS,
    EXCEL_ENGINE,
    EXCEL_VISIBLE,
    MSO_AUTOMATION_SECURITY_FORCE_DISABLE,
    XL_CALC_MANUAL,
    validate_config,
)

_WIN32_AVAILABLE = (sys.platform == "win32") and (pythoncom is not None) and (win32 is not None)


def _require_windows(feature: str) -> None:
    if not _WIN32_AVAILABLE:
        raise RuntimeError(
            f"{feature} requires Windows with pywin32 installed. "
            f"Current platform: {sys.platform}. "
            f"Use --engine {ENGINE_OPENPYXL} or run on Windows."
        )


# -----------------------------
# Excel (COM)
# -----------------------------
class ExcelWorkbook:
    """Thin wrapper over an Excel COM Workbook opened by ExcelApplication."""

    def __init__(self, native, path: str):
        self.native = native
        self.path = path

    @property
    def name(self) -> str:
        return self.native.Name

    @property
    def worksheets(self) -> List[Any]:
        return list(self.native.Worksheets)

    def save(self) -> None:
        self.native.Save()

    def close(self) -> None:
        # saving is always explicit through save()
        self.native.Close(SaveChanges=False)


class ExcelApplication:
    def __init__(self, *, visible: bool = False, disable_macros: bool = True):
        self.visible = visible
        self.disable_macros = disable_macros
        self.excel = None

    def start(self) -> "ExcelApplication":
        _require_windows("Excel automation")
        pythoncom.CoInitialize()
        try:
            self.excel = win32.DispatchEx("Excel.Application")
        except Exception:
            pythoncom.CoUninitialize()
            raise
        self.excel.Visible = bool(self.visible)
        self.excel.DisplayAlerts = False
        self.excel.AskToUpdateLinks = False
        self.excel.EnableEvents = False
        self.excel.ScreenUpdating = False
        try:
            self.excel.Calculation = XL_CALC_MANUAL
        except Exception:
            # Calculation can only be set once a workbook exists on some builds
            pass
        if self.disable_macros:
            try:
                self.excel.AutomationSecurity = MSO_AUTOMATION_SECURITY_FORCE_DISABLE
            except Exception:
                pass
        return self

    def _require_started(self) -> None:
        if self.excel is None:
            raise RuntimeError("ExcelApplication is not started. Call .start() first.")

    def open(self, path: Union[str, Path]) -> ExcelWorkbook:
        self._require_started()
        full_path = str(Path(path).resolve())
        wb = self.excel.Workbooks.Open(
            Filename=full_path,
            UpdateLinks=0,
            IgnoreReadOnlyRecommended=True,
            AddToMru=False,
        )
        return ExcelWorkbook(wb, full_path)

    def quit(self) -> None:
        if self.excel is None:
            return
        try:
            self.excel.Quit()
        finally:
            self.excel = None
            pythoncom.CoUninitialize()


# -----------------------------
# openpyxl
# -----------------------------
class OpenpyxlWorkbook:
    """Workbook loaded with openpyxl; save() writes back to the source path."""

    def __init__(self, native, path: str):
        self.native = native
        self.path = path

    @property
    def name(self) -> str:
        return Path(self.path).name

    @property
    def worksheets(self) -> List[Any]:
        return list(self.native.worksheets)

    def save(self) -> None:
        self.native.save(self.path)

    def close(self) -> None:
        self.native.close()


class OpenpyxlApplication:
    def __init__(self):
        self.running = False

    def start(self) -> "OpenpyxlApplication":
        self.running = True
        return self

    def open(self, path: Union[str, Path]) -> OpenpyxlWorkbook:
        if not self.running:
            raise RuntimeError("OpenpyxlApplication is not started. Call .start() first.")
        p = Path(path)
        # .xls is rejected by openpyxl itself
        wb = load_workbook(p, keep_vba=p.suffix.lower() == ".xlsm")
        return OpenpyxlWorkbook(wb, str(p))

    def quit(self) -> None:
        self.running = False


def create_application(
    engine: Optional[str] = None,
    *,
    visible: Optional[bool] = None,
    disable_macros: Optional[bool] = None,
):
    """Build and start the spreadsheet application for ``engine``.

    Args:
        engine: 'com' or 'openpyxl' (defaults to EXCEL_ENGINE)
        visible: Show the Excel window (COM only)
        disable_macros: Force-disable macros on open (COM only)

    Returns:
        A started application handle; the caller owns it and must quit() it
    """
    engine = engine or EXCEL_ENGINE
    validate_config(engine)

    if engine == ENGINE_COM:
        return ExcelApplication(
            visible=EXCEL_VISIBLE if visible is None else visible,
            disable_macros=EXCEL_DISABLE_MACROS if disable_macros is None else disable_macros,
        ).start()
    return OpenpyxlApplication().start()
