import json

import pytest
from billmark.config import load_sheet_config, parse_sheet_id

@pytest.mark.parametrize("value, expected", [
    (0, 0),
    (123456, 123456),
    ("42", 42),
])
def test_parse_sheet_id(value, expected):
    assert parse_sheet_id(value) == expected

@pytest.mark.parametrize("value", ["Bills", None, -3, True, [1]])
def test_parse_sheet_id_invalid_falls_back_to_zero(value, capsys):
    assert parse_sheet_id(value) == 0
    assert "invalid sheet_id" in capsys.readouterr().out

def test_load_sheet_config_prefers_real_file(tmp_path):
    (tmp_path / "sheet_config.json").write_text(json.dumps({"spreadsheet_id": "real", "sheet_id": 7}), encoding="utf-8")
    (tmp_path / "sheet_config.example.json").write_text(json.dumps({"spreadsheet_id": "example"}), encoding="utf-8")
    assert load_sheet_config(tmp_path / "sheet_config.json") == {"spreadsheet_id": "real", "sheet_id": 7}

def test_load_sheet_config_falls_back_to_example(tmp_path, capsys):
    (tmp_path / "sheet_config.example.json").write_text(json.dumps({"spreadsheet_id": "example"}), encoding="utf-8")
    assert load_sheet_config(tmp_path / "sheet_config.json") == {"spreadsheet_id": "example"}
    assert "Using example config" in capsys.readouterr().out

def test_load_sheet_config_defaults(tmp_path):
    assert load_sheet_config(tmp_path / "sheet_config.json") == {"spreadsheet_id": "", "sheet_id": 0}
