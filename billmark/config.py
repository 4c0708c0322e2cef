
# Configuration for billmark

import json
from pathlib import Path
from rich.console import Console
from rich.markup import escape

console = Console()

PROJECT_DIR = Path(__file__).parent.parent

def load_sheet_config(config_path: Path | None = None):
    """Loads spreadsheet ID and sheet ID from config/sheet_config.json or falls back to example."""
    config_path = config_path or PROJECT_DIR / "config/sheet_config.json"
    example_path = config_path.with_name("sheet_config.example.json")

    config = {}
    if config_path.exists():
        with open(config_path, 'r') as f:
            config = json.load(f)
    elif example_path.exists():
        console.print(f"[yellow]Warning: {config_path.name} not found. Using example config.[/yellow]")
        with open(example_path, 'r') as f:
            config = json.load(f)
    else:
        # Empty spreadsheet id makes `mark` ask for --spreadsheet-id instead of crashing on import
        config = {"spreadsheet_id": "", "sheet_id": 0}

    return config

def parse_sheet_id(value) -> int:
    """Numeric tab id from the config; falls back to 0 (the first tab) when unusable."""
    try:
        sheet_id = int(value)
    except (TypeError, ValueError):
        sheet_id = -1
    if isinstance(value, bool) or sheet_id < 0:
        console.print(f"[yellow]Warning: invalid sheet_id {escape(repr(value))} in sheet config. Using 0.[/yellow]")
        return 0
    return sheet_id

_sheet_config = load_sheet_config()

SPREADSHEET_ID = _sheet_config.get("spreadsheet_id", "")
SHEET_ID = parse_sheet_id(_sheet_config.get("sheet_id", 0))

# OAuth client config and cached user token, relative to the working directory
CREDENTIALS_PATH = "credentials/credentials.json"
TOKEN_PATH = "credentials/token.json"

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

SHEETS_API_BASE = "https://sheets.googleapis.com/v4"
