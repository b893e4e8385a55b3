from __future__ import annotations

import logging

import pytest

from campuscoffee.common.errors import MissingRequiredFields
from campuscoffee.common.models import CampusZone, ExternalNode, PosCategory
from campuscoffee.pos.converter import build_description, capitalize_first, convert_node_to_record


def make_node(**overrides) -> ExternalNode:
    fields = {
        "node_id": 1,
        "name": "Test Café",
        "amenity": "cafe",
        "street": "Teststrasse",
        "house_number": "1",
        "postal_code": "69117",
        "city": "Heidelberg",
    }
    fields.update(overrides)
    return ExternalNode(**fields)


def test_convert_copies_address_and_maps_category_and_campus():
    record = convert_node_to_record(make_node())

    assert record.name == "Test Café"
    assert record.category == PosCategory.CAFE
    assert record.campus == CampusZone.ALTSTADT
    assert record.street == "Teststrasse"
    assert record.house_number == "1"
    assert record.postal_code == 69117
    assert record.city == "Heidelberg"
    assert record.description == "Cafe"
    assert record.id is None


@pytest.mark.parametrize(
    ("amenity", "expected"),
    [
        ("cafe", PosCategory.CAFE),
        ("Bakery", PosCategory.BAKERY),
        ("VENDING_MACHINE", PosCategory.VENDING_MACHINE),
        ("cafeteria", PosCategory.CAFETERIA),
        ("restaurant", PosCategory.CAFETERIA),
        ("fast_food", PosCategory.CAFETERIA),
    ],
)
def test_convert_maps_amenity_case_insensitively(amenity, expected):
    assert convert_node_to_record(make_node(amenity=amenity)).category == expected


def test_convert_unknown_amenity_defaults_to_cafe_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="campuscoffee.pos.converter"):
        record = convert_node_to_record(make_node(amenity="pub"))

    assert record.category == PosCategory.CAFE
    assert "Unknown amenity type 'pub'" in caplog.text


@pytest.mark.parametrize(
    ("postal_code", "expected"),
    [("69115", CampusZone.BERGHEIM), ("69117", CampusZone.ALTSTADT), ("69120", CampusZone.INF)],
)
def test_convert_maps_known_postal_codes_to_campus(postal_code, expected):
    assert convert_node_to_record(make_node(postal_code=postal_code)).campus == expected


def test_convert_unknown_postal_code_leaves_campus_unset():
    record = convert_node_to_record(make_node(postal_code="10115"))

    assert record.campus is None
    assert record.postal_code == 10115


def test_convert_tolerates_whitespace_around_postal_code():
    assert convert_node_to_record(make_node(postal_code=" 69120 ")).postal_code == 69120


def test_convert_reports_all_missing_fields_in_order():
    node = ExternalNode(node_id=5, name="Only A Name")

    with pytest.raises(MissingRequiredFields) as excinfo:
        convert_node_to_record(node)

    assert excinfo.value.node_id == 5
    assert excinfo.value.fields == [
        "amenity",
        "addr:street",
        "addr:housenumber",
        "addr:postcode",
        "addr:city",
    ]


def test_convert_treats_blank_strings_as_missing():
    with pytest.raises(MissingRequiredFields) as excinfo:
        convert_node_to_record(make_node(name="   ", city=""))

    assert excinfo.value.fields == ["name", "addr:city"]


def test_convert_invalid_postal_code_joins_missing_fields_failure():
    with pytest.raises(MissingRequiredFields) as excinfo:
        convert_node_to_record(make_node(postal_code="abc"))

    assert excinfo.value.fields == ["addr:postcode (invalid format)"]


def test_convert_invalid_postal_code_is_appended_after_missing_fields():
    with pytest.raises(MissingRequiredFields) as excinfo:
        convert_node_to_record(make_node(postal_code="69 117", street=None))

    assert excinfo.value.fields == ["addr:street", "addr:postcode (invalid format)"]
    assert "addr:street, addr:postcode (invalid format)" in str(excinfo.value)


def test_build_description_joins_amenity_hours_and_website():
    node = make_node(amenity="cafe", opening_hours="Mo-Fr 08:00-18:00", website="https://example.org")

    assert build_description(node) == "Cafe - Hours: Mo-Fr 08:00-18:00 - https://example.org"


def test_build_description_skips_blank_parts():
    node = make_node(amenity="vending_machine", opening_hours=" ", website="https://example.org")

    assert build_description(node) == "Vending_machine - https://example.org"


def test_build_description_falls_back_to_placeholder():
    node = ExternalNode(node_id=123)

    assert build_description(node) == "Imported from OpenStreetMap (node 123)"


def test_capitalize_first_keeps_rest_of_string():
    assert capitalize_first("fast_Food") == "Fast_Food"
    assert capitalize_first("") == ""
