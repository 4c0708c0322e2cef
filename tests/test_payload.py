import json

import pytest
from billmark.errors import PayloadError
from billmark.payload import build_format_rule_request, serialize_request

def _rule(payload):
    return payload["requests"][0]["addConditionalFormatRule"]["rule"]

def test_row_range_is_half_open():
    rng = _rule(build_format_rule_request(5, 1))["ranges"][0]
    assert (rng["startRowIndex"], rng["endRowIndex"]) == (5, 6)

def test_column_range_is_half_open():
    rng = _rule(build_format_rule_request(2, 1))["ranges"][0]
    assert (rng["startColumnIndex"], rng["endColumnIndex"]) == (1, 2)

def test_single_request_and_single_range():
    payload = build_format_rule_request(4, 3)
    assert len(payload["requests"]) == 1
    assert len(_rule(payload)["ranges"]) == 1

def test_serialized_payload_shape():
    decoded = json.loads(serialize_request(build_format_rule_request(0, 0)))
    rule = _rule(decoded)
    assert rule["ranges"][0]["sheetId"] == 0
    assert rule["booleanRule"]["condition"]["type"] == "NOT_BLANK"
    assert rule["booleanRule"]["format"]["textFormat"]["strikethrough"] is True

def test_custom_sheet_id():
    rng = _rule(build_format_rule_request(3, 2, sheet_id=123456))["ranges"][0]
    assert rng["sheetId"] == 123456

def test_serialized_payload_is_compact_utf8():
    body = serialize_request(build_format_rule_request(9, 4))
    assert isinstance(body, bytes)
    assert b" " not in body

@pytest.mark.parametrize("row, col, sheet_id", [
    (-1, 0, 0),
    (0, -1, 0),
    (0, 0, -5),
    (1.5, 0, 0),
    ("2", 0, 0),
    (True, 0, 0),
])
def test_invalid_indices_rejected(row, col, sheet_id):
    with pytest.raises(PayloadError):
        build_format_rule_request(row, col, sheet_id=sheet_id)

def test_serialize_failure_raises_payload_error():
    with pytest.raises(PayloadError):
        serialize_request({"requests": [object()]})
    with pytest.raises(PayloadError):
        serialize_request({"value": float("nan")})
