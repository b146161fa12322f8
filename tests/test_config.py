import pytest

from config import ENGINE_COM, ENGINE_OPENPYXL, SPREADSHEET_EXTENSIONS, validate_config


@pytest.mark.parametrize("engine", [ENGINE_COM, ENGINE_OPENPYXL])
def test_validate_config_accepts_known_engines(engine: str) -> None:
    assert validate_config(engine)


def test_validate_config_rejects_unknown_engine() -> None:
    with pytest.raises(ValueError, match="EXCEL_ENGINE"):
        validate_config("calc")


def test_recognised_extensions() -> None:
    assert SPREADSHEET_EXTENSIONS == (".xls", ".xlsx", ".xlsm")
