import pytest
from generator_utils import convert_to_snake_case, convert_type_to_protobuf


@pytest.mark.parametrize("text,expected", [
    ("UserID", "user_id"),
    ("HTTPStatus", "httpstatus"),
    ("Field1", "field1"),
    ("AddressCity", "address_city"),
    ("already_snake", "already_snake"),
    ("X, Y", "x, y"),
    ("lowerCamel", "lower_camel"),
])
def test_convert_to_snake_case(text, expected):
    assert convert_to_snake_case(text) == expected


def test_snake_case_is_idempotent():
    for text in ("UserID", "ShipToCity", "field1"):
        once = convert_to_snake_case(text)
        assert convert_to_snake_case(once) == once


@pytest.mark.parametrize("go_type,proto_type", [
    ("string", "string"),
    ("int", "int32"),
    ("int8", "int32"),
    ("int16", "int32"),
    ("int32", "int32"),
    ("uint", "uint32"),
    ("uint8", "uint32"),
    ("uint16", "uint32"),
    ("uint32", "uint32"),
    ("int64", "int64"),
    ("uint64", "uint64"),
    ("float32", "double"),
    ("float64", "double"),
    ("bool", "bool"),
    ("time.Time", "int64"),
    ("byte", "uint32"),
    ("rune", "int32"),
])
def test_scalar_mapping(go_type, proto_type):
    assert convert_type_to_protobuf(go_type) == proto_type


def test_unknown_types_pass_through():
    assert convert_type_to_protobuf("decimal.Decimal") == "decimal.Decimal"
    assert convert_type_to_protobuf("Color") == "Color"
