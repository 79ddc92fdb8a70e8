import json

import pytest

from invoice_extractor.processing.normalizer import (
    locate_json_object,
    normalize_model_output,
    strip_code_fences,
)


def test_strips_json_fences() -> None:
    text = '```json\n{"Invoices": []}\n```'
    stripped = strip_code_fences(text)
    assert "```" not in stripped
    assert stripped == '{"Invoices": []}'


def test_strips_bare_fences() -> None:
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'


def test_fenced_payload_is_parsed() -> None:
    text = '```json\n{"Invoices":[{"Serial Number":"INV-1"}], "Products":[], "Customers":[]}\n```'
    result = normalize_model_output(text)
    assert result.invoices == [{"Serial Number": "INV-1"}]
    assert result.products == []
    assert result.customers == []


def test_leading_and_trailing_commentary() -> None:
    text = 'Here is the data you asked for:\n{"Customers": [{"Customer Name": "Ada"}]}\nLet me know if you need more.'
    result = normalize_model_output(text)
    assert result.customers == [{"Customer Name": "Ada"}]
    assert result.invoices == []


def test_locate_is_greedy_across_objects() -> None:
    text = 'first {"a": 1} then {"b": 2} done'
    assert locate_json_object(text) == '{"a": 1} then {"b": 2}'


def test_multiple_objects_fall_back_to_empty() -> None:
    result = normalize_model_output('{"Invoices": [1]} and also {"Products": [2]}')
    assert result.to_dict() == {"invoices": [], "products": [], "customers": []}


def test_nested_objects_survive_greedy_match() -> None:
    text = 'Result: {"Invoices": [{"Serial Number": "1", "meta": {"x": 1}}]} end'
    result = normalize_model_output(text)
    assert result.invoices == [{"Serial Number": "1", "meta": {"x": 1}}]


def test_no_object_uses_whole_text() -> None:
    assert locate_json_object("  nothing here  ") == "  nothing here  "


@pytest.mark.parametrize(
    "text",
    [
        "",
        "I could not read this document.",
        "{not json at all}",
        '{"Invoices": [',
        "[1, 2, 3]",
        '"just a string"',
    ],
)
def test_unparseable_output_yields_empty_records(text) -> None:
    result = normalize_model_output(text)
    assert result.to_dict() == {"invoices": [], "products": [], "customers": []}


def test_missing_and_non_list_families_default_to_empty() -> None:
    result = normalize_model_output('{"Invoices": {"Serial Number": "1"}, "Products": null}')
    assert result.invoices == []
    assert result.products == []
    assert result.customers == []


def test_lowercase_keys_are_not_recognised() -> None:
    result = normalize_model_output('{"invoices": [{"Serial Number": "1"}]}')
    assert result.invoices == []


@pytest.mark.parametrize(
    "text",
    [
        '{"Invoices": [{"Qty": NaN}], "Products": [], "Customers": []}',
        '{"Invoices": [{"Total Amount": Infinity}]}',
        '{"Products": [{"Tax": -Infinity}]}',
        '{"Customers": [{"Total Purchase Amount": 1e999}]}',
    ],
)
def test_non_standard_numbers_are_rejected(text) -> None:
    result = normalize_model_output(text)

    assert result.to_dict() == {"invoices": [], "products": [], "customers": []}
    json.dumps(result.to_dict(), allow_nan=False)


def test_ordinary_floats_still_parse() -> None:
    result = normalize_model_output('{"Invoices": [{"Tax": 1.5, "Qty": 2}]}')
    assert result.invoices == [{"Tax": 1.5, "Qty": 2}]
