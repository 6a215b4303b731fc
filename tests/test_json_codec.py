import logging

from db import json_codec
from models.accommodation import Accommodation


def test_malformed_json_decodes_to_default_and_logs_record(caplog):
    with caplog.at_level(logging.WARNING):
        assert json_codec.decode_list("[not json", field="amenities", record_id=42) == []
    assert "amenities" in caplog.text
    assert "42" in caplog.text


def test_missing_values_decode_to_empty_defaults():
    assert json_codec.decode_list(None, field="photos") == []
    assert json_codec.decode_object("", field="contact_info") == {}
    assert json_codec.decode_object(b"", field="contact_info") == {}


def test_wrong_shape_decodes_to_default(caplog):
    with caplog.at_level(logging.WARNING):
        assert json_codec.decode_object('["a", "b"]', field="travel_dates", record_id=7) == {}
        assert json_codec.decode_list('{"a": 1}', field="interests", record_id=8) == []
    assert "travel_dates" in caplog.text


def test_already_parsed_values_pass_through():
    assert json_codec.decode_list(["WiFi"], field="amenities") == ["WiFi"]
    assert json_codec.decode_object({"phone": "1"}, field="contact_info") == {"phone": "1"}


def test_text_and_bytes_are_parsed():
    assert json_codec.decode_list('["WiFi","AC"]', field="amenities") == ["WiFi", "AC"]
    assert json_codec.decode_object(b'{"checkin":"2025-07-01"}', field="travel_dates") == {
        "checkin": "2025-07-01"
    }


def test_encode_is_compact_and_keeps_unicode():
    assert json_codec.encode(["Café", "WiFi"]) == '["Café","WiFi"]'
    assert json_codec.encode(None) == "[]"
    assert json_codec.encode({"a": 1}) == '{"a":1}'


def test_corrupt_row_still_builds_a_model():
    row = {
        "id": 3, "name": "Hub", "city": "Pune", "address": "X", "price_per_night": 1500,
        "accommodation_type": "hostel", "amenities": "{{oops", "photos": None,
        "contact_info": "[]", "is_active": 1, "latitude": None, "longitude": None,
    }
    acc = Accommodation.from_row(row)
    assert acc.amenities == []
    assert acc.photos == []
    assert acc.contact_info == {}
