"""
Configuration module for excel-batch-executor
"""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.resolve()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Spreadsheet engine selection
ENGINE_COM = "com"
ENGINE_OPENPYXL = "openpyxl"
SUPPORTED_ENGINES = (ENGINE_COM, ENGINE_OPENPYXL)

DEFAULT_ENGINE = ENGINE_COM if sys.platform == "win32" else ENGINE_OPENPYXL
EXCEL_ENGINE = os.getenv("EXCEL_ENGINE", DEFAULT_ENGINE).strip().lower()

# Excel application settings (COM engine only)
EXCEL_VISIBLE = _env_flag("EXCEL_VISIBLE", False)
EXCEL_DISABLE_MACROS = _env_flag("EXCEL_DISABLE_MACROS", True)

# Run defaults
SAVE_ON_SUCCESS = _env_flag("EXCEL_SAVE_ON_SUCCESS", True)
RECURSIVE = _env_flag("EXCEL_RECURSIVE", True)

# legacy binary, OOXML, macro-enabled OOXML
SPREADSHEET_EXTENSIONS = (".xls", ".xlsx", ".xlsm")

# Folder picker
FOLDER_DIALOG_TITLE = "Select the folder containing the files to process"
SELECTION_CANCELLED_MESSAGE = "Folder selection was cancelled."

# Excel constants
XL_CALC_MANUAL = -4135
MSO_AUTOMATION_SECURITY_FORCE_DISABLE = 3


def validate_config(engine: Optional[str] = None) -> bool:
    """Validate required configuration settings"""
    effective_engine = engine if engine is not None else EXCEL_ENGINE
    if effective_engine not in SUPPORTED_ENGINES:
        raise ValueError(
            f"Unknown spreadsheet engine: {effective_engine!r}. "
            f"Set EXCEL_ENGINE to one of: {', '.join(SUPPORTED_ENGINES)}."
        )
    return True


def get_relative_path(absolute_path: Path) -> Path:
    """Get path relative to project root"""
    try:
        return absolute_path.relative_to(PROJECT_ROOT)
    except ValueError:
        return absolute_path
