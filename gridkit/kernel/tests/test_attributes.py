"""
gridkit Kernel — Attribute Boundary Tests

Well-formed attribute values turn into the matching action. Malformed ones
fall back to a default and log a warning, or raise in strict mode.
"""

import json
import logging

import pytest

from gridkit.kernel.attributes import (
    ATTRIBUTE_NAMES,
    AttributeParseError,
    parse_attribute,
    parse_flag,
    parse_page,
    parse_page_size,
    parse_selection_mode,
)
from gridkit.kernel.models import ColumnDescriptor


class TestWellFormed:
    def test_data(self):
        action = parse_attribute("data", '[{"id": 1}, {"id": 2}]')
        assert action.type == "data.set"
        assert action.payload == {"data": [{"id": 1}, {"id": 2}]}

    def test_data_already_decoded(self):
        rows = [{"id": 1}]
        assert parse_attribute("data", rows).payload["data"] == rows

    def test_columns(self):
        action = parse_attribute("columns", json.dumps([{"key": "id", "width": 80}, {"key": "name", "label": "Name"}]))
        assert action.type == "columns.set"
        assert action.payload["columns"] == [
            ColumnDescriptor(key="id", label="id", width="80px"),
            ColumnDescriptor(key="name", label="Name"),
        ]

    def test_page_size(self):
        action = parse_attribute("page-size", "25")
        assert (action.type, action.payload) == ("page_size.set", {"page_size": 25})

    def test_current_page(self):
        action = parse_attribute("current-page", " 3 ")
        assert (action.type, action.payload) == ("page.set", {"page": 3})

    @pytest.mark.parametrize("value, mode", [("single", "single"), ("MULTIPLE", "multiple"), ("none", "none"), ("", "none")])
    def test_selectable(self, value, mode):
        action = parse_attribute("selectable", value)
        assert (action.type, action.payload) == ("selection_mode.set", {"mode": mode})

    @pytest.mark.parametrize(
        "name, field",
        [
            ("sortable", "sortable"),
            ("searchable", "searchable"),
            ("filterable", "searchable"),
            ("pageable", "pageable"),
            ("virtual-scroll", "virtual_scroll"),
        ],
    )
    def test_flags(self, name, field):
        action = parse_attribute(name, "")
        assert (action.type, action.payload) == ("flags.set", {field: True})

    @pytest.mark.parametrize("name", sorted(ATTRIBUTE_NAMES))
    def test_every_observed_attribute_yields_an_action(self, name):
        assert parse_attribute(name, "") is not None

    def test_unobserved_attribute(self):
        assert parse_attribute("theme", "dark") is None

    def test_empty_data_is_no_rows(self):
        assert parse_attribute("data", "").payload == {"data": []}


class TestFlagPresence:
    @pytest.mark.parametrize("value", ["", "false", "0", "sortable"])
    def test_any_string_is_on(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", [None, False])
    def test_absent_is_off(self, value):
        assert parse_flag(value) is False


class TestFallbacks:
    @pytest.mark.parametrize(
        "name, value, payload",
        [
            ("data", "not json", {"data": []}),
            ("data", '{"id": 1}', {"data": []}),
            ("data", "[1, 2]", {"data": []}),
            ("columns", "[{", {"columns": []}),
            ("columns", '[{"label": "no key"}]', {"columns": []}),
            ("page-size", "ten", {"page_size": 10}),
            ("page-size", "-5", {"page_size": 10}),
            ("current-page", "second", {"page": 1}),
            ("selectable", "some", {"mode": "none"}),
        ],
    )
    def test_malformed_value_falls_back_with_warning(self, caplog, name, value, payload):
        with caplog.at_level(logging.WARNING, logger="gridkit.kernel.attributes"):
            action = parse_attribute(name, value)
        assert action.payload == payload
        assert any(f"malformed {name}" in r.getMessage() for r in caplog.records)

    def test_page_size_default_is_configurable(self):
        assert parse_attribute("page-size", "0", default_page_size=50).payload == {"page_size": 50}

    def test_integral_float_page_size(self):
        assert parse_page_size(20.0, 10) == 20

    def test_empty_page_is_first(self):
        assert parse_page("") == 1


class TestStrict:
    @pytest.mark.parametrize(
        "name, value",
        [("data", "not json"), ("columns", '"id"'), ("page-size", "0"), ("current-page", "x"), ("selectable", "all")],
    )
    def test_strict_raises(self, name, value):
        with pytest.raises(AttributeParseError) as exc:
            parse_attribute(name, value, strict=True)
        assert exc.value.name == name
        assert exc.value.value == value

    def test_strict_accepts_well_formed(self):
        assert parse_selection_mode("single", strict=True) == "single"
