"""Tests for the view data result parser.

Covers payload type checks, encoding and schema failures, the
NoResult case for unfinished orders, and license flattening order.
"""

import json

import pytest
from pydantic import ValidationError

from fscheckout.layers.result_parser import ResultParser
from fscheckout.models.license import (
    ErrorKind,
    Failure,
    LicenseRecord,
    NoResult,
    Success,
)


@pytest.fixture
def parser():
    return ResultParser()


def view_data(debtor_name=None, groups=None):
    data = {"order": {"groups": groups if groups is not None else []}}
    if debtor_name is not None:
        data["debtorName"] = debtor_name
    return json.dumps(data)


def item(*codes):
    return {"fulfillment": {"licenses": [{"code": code} for code in codes]}}


class TestScenarios:
    """End-to-end payloads."""

    def test_no_debtor_name_is_no_result(self, parser):
        assert parser.parse('{"order":{"groups":[]}}') == NoResult()

    def test_single_license(self, parser):
        payload = (
            '{"debtorName":"Alice","order":{"groups":[{"items":'
            '[{"fulfillment":{"licenses":[{"code":"ABC-123"}]}}]}]}}'
        )
        assert parser.parse(payload) == Success(
            records=[LicenseRecord(sku="", name="Alice", code="ABC-123")]
        )

    def test_item_without_fulfillment_is_empty_success(self, parser):
        payload = '{"debtorName":"Bob","order":{"groups":[{"items":[{}]}]}}'
        assert parser.parse(payload) == Success(records=[])


class TestFlattening:
    """License flattening."""

    def test_document_order(self, parser):
        payload = view_data("Carol", [
            {"items": [item("A1", "A2"), {}, item("B1")]},
            {"items": []},
            {"items": [item("C1")]},
        ])
        outcome = parser.parse(payload)
        assert isinstance(outcome, Success)
        assert [r.code for r in outcome.records] == ["A1", "A2", "B1", "C1"]

    def test_all_records_share_name_and_empty_sku(self, parser):
        payload = view_data("Dana", [{"items": [item("X", "Y"), item("Z")]}])
        outcome = parser.parse(payload)
        assert {r.name for r in outcome.records} == {"Dana"}
        assert {r.sku for r in outcome.records} == {""}

    def test_empty_groups_with_name_is_empty_success(self, parser):
        assert parser.parse(view_data("Eve")) == Success(records=[])

    def test_unknown_keys_are_ignored(self, parser):
        payload = json.dumps({
            "debtorName": "Frank",
            "reference": "ZZE200530-1234-56789",
            "order": {
                "currency": "EUR",
                "groups": [{
                    "display": "Soy",
                    "items": [{
                        "product": "soy-for-community-slacks",
                        "fulfillment": {
                            "licenses": [{"code": "K-1", "display": "License"}],
                        },
                    }],
                }],
            },
        })
        assert parser.parse(payload) == Success(
            records=[LicenseRecord(name="Frank", code="K-1")]
        )

    def test_name_without_licenses_is_not_no_result(self, parser):
        outcome = parser.parse(view_data("Gina", [{"items": [{}]}]))
        assert outcome != NoResult()
        assert outcome == Success(records=[])


class TestNoResult:
    """Payloads without a purchaser name."""

    def test_licenses_without_name(self, parser):
        payload = view_data(groups=[{"items": [item("X")]}])
        assert parser.parse(payload) == NoResult()

    def test_null_name(self, parser):
        payload = '{"debtorName":null,"order":{"groups":[]}}'
        assert parser.parse(payload) == NoResult()


class TestFailures:
    """Typed failures."""

    @pytest.mark.parametrize("payload", [None, 42, b"{}", ["{}"], {"order": {}}])
    def test_non_string_payload(self, parser, payload):
        outcome = parser.parse(payload)
        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.INVALID_PAYLOAD_TYPE

    def test_lone_surrogate_is_encoding_error(self, parser):
        outcome = parser.parse('{"debtorName":"\ud800","order":{"groups":[]}}')
        assert outcome == Failure(kind=ErrorKind.ENCODING_ERROR)

    @pytest.mark.parametrize("payload", [
        "",
        "not json",
        "<div>loading</div>",
        "[]",
        "null",
        '{"debtorName":"Hal"}',
        '{"debtorName":"Hal","order":{}}',
        '{"debtorName":"Hal","order":{"groups":[{}]}}',
        '{"debtorName":"Hal","order":{"groups":[{"items":[{"fulfillment":{}}]}]}}',
        '{"debtorName":"Hal","order":{"groups":[{"items":[{"fulfillment":{"licenses":[{}]}}]}]}}',
        '{"debtorName":"Hal","order":{"groups":[{"items":[{"fulfillment":{"licenses":[{"code":7}]}}]}]}}',
        '{"debtorName":42,"order":{"groups":[]}}',
        '{"debtorName":"Hal","order":{"groups":"none"}}',
    ])
    def test_malformed_structure(self, parser, payload):
        outcome = parser.parse(payload)
        assert isinstance(outcome, Failure)
        assert outcome.kind == ErrorKind.MALFORMED_STRUCTURE

    def test_schema_is_checked_before_name(self, parser):
        outcome = parser.parse('{"order":{"groups":[{"items":"x"}]}}')
        assert outcome == Failure(kind=ErrorKind.MALFORMED_STRUCTURE)

    def test_failure_carries_detail(self, parser):
        outcome = parser.parse("not json")
        assert outcome.detail


class TestPurity:
    """The parser keeps no state between calls."""

    @pytest.mark.parametrize("payload", [
        '{"order":{"groups":[]}}',
        view_data("Ivy", [{"items": [item("Q")]}]),
        "garbage",
        3.5,
    ])
    def test_same_payload_same_outcome(self, parser, payload):
        assert parser.parse(payload) == parser.parse(payload)

    def test_records_are_immutable(self, parser):
        outcome = parser.parse(view_data("Jo", [{"items": [item("R")]}]))
        with pytest.raises(ValidationError):
            outcome.records[0].code = "changed"
