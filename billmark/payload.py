import json

from billmark.errors import PayloadError


def build_format_rule_request(row_index: int, column_index: int, sheet_id: int = 0) -> dict:
    """
    Builds the batchUpdate body that strikes through one cell once it is not blank.

    Args:
        row_index: Zero-based row of the cell.
        column_index: Zero-based column of the cell.
        sheet_id: Numeric id of the worksheet tab (not the spreadsheet key).

    Returns:
        dict: A body holding a single addConditionalFormatRule request whose
        range covers [row, row + 1) x [column, column + 1).
    """
    for name, value in (("row_index", row_index), ("column_index", column_index), ("sheet_id", sheet_id)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise PayloadError(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise PayloadError(f"{name} must not be negative, got {value}")

    return {
        "requests": [
            {
                "addConditionalFormatRule": {
                    "rule": {
                        "ranges": [
                            {
                                "sheetId": sheet_id,
                                "startRowIndex": row_index,
                                "endRowIndex": row_index + 1,
                                "startColumnIndex": column_index,
                                "endColumnIndex": column_index + 1,
                            }
                        ],
                        "booleanRule": {
                            "condition": {"type": "NOT_BLANK"},
                            "format": {"textFormat": {"strikethrough": True}},
                        },
                    }
                }
            }
        ]
    }


def serialize_request(payload: dict) -> bytes:
    """Encodes a request body as compact UTF-8 JSON."""
    try:
        return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PayloadError(f"Unable to serialize request: {e}") from e
