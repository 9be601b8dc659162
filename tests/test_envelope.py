"""
Unit tests for list envelope normalization.
"""
import pytest

from portal_client.envelope import (
    EMPTY,
    Items,
    application_message,
    is_application_failure,
    normalize,
    unwrap_record,
)

RECORDS = [{"_id": "1"}, {"_id": "2"}]


class TestNormalize:
    def test_bare_list(self):
        result = normalize(RECORDS)

        assert isinstance(result, Items)
        assert result.items == RECORDS
        assert result.total == 2
        assert not result.is_authoritative

    def test_data_list_with_total(self):
        result = normalize({"success": True, "data": RECORDS, "total": 7, "page": 1, "limit": 10, "totalPages": 1})

        assert result.items == RECORDS
        assert result.total == 7
        assert result.reported_total == 7
        assert result.reported_pages == 1
        assert result.page == 1
        assert result.limit == 10
        assert result.is_authoritative

    def test_data_list_without_total_counts_items(self):
        result = normalize({"data": RECORDS})

        assert result.total == 2
        assert result.reported_total is None
        assert not result.is_authoritative

    def test_nested_data_prefers_inner_metadata(self):
        result = normalize({"data": {"data": RECORDS, "total": 7}, "total": 99})

        assert result.items == RECORDS
        assert result.total == 7

    def test_nested_data_falls_back_to_outer_metadata(self):
        result = normalize({"data": {"data": RECORDS}, "totalPages": 3})

        assert result.reported_pages == 3
        assert result.total == 2

    def test_capitalized_data(self):
        result = normalize({"Data": RECORDS, "count": "12"})

        assert result.items == RECORDS
        assert result.total == 12

    @pytest.mark.parametrize("key", ["total", "count", "totalCount", "totalAdvances"])
    def test_total_aliases(self, key):
        assert normalize({"data": RECORDS, key: 40}).total == 40

    @pytest.mark.parametrize("bad_total", [True, -3, "many", None])
    def test_unusable_totals_are_ignored(self, bad_total):
        result = normalize({"data": RECORDS, "total": bad_total})

        assert result.total == 2
        assert result.reported_total is None

    @pytest.mark.parametrize("raw", [None, "", "ok", 5, {}, {"data": None}, {"data": {"x": 1}}, {"message": "hi"}])
    def test_unrecognized_shapes_are_empty(self, raw):
        result = normalize(raw)

        assert result is EMPTY
        assert result.items == []
        assert result.total == 0

    def test_empty_list_is_items_not_empty_marker(self):
        result = normalize([])

        assert isinstance(result, Items)
        assert result.total == 0


class TestApplicationFailure:
    def test_success_false_is_failure(self):
        assert is_application_failure({"success": False, "message": "Duplicate"})

    @pytest.mark.parametrize("raw", [{"success": True}, {"data": []}, [], None, {"success": 0}])
    def test_other_payloads_are_not_failures(self, raw):
        assert not is_application_failure(raw)

    def test_message_prefers_message_then_error(self):
        assert application_message({"message": " Nope ", "error": "x"}, "default") == "Nope"
        assert application_message({"error": "Broken"}, "default") == "Broken"
        assert application_message({"message": "   "}, "default") == "default"
        assert application_message("text", "default") == "default"


class TestUnwrapRecord:
    def test_returns_data_when_present(self):
        assert unwrap_record({"success": True, "data": {"_id": "1"}}) == {"_id": "1"}

    def test_returns_payload_without_data(self):
        assert unwrap_record({"_id": "1"}) == {"_id": "1"}
        assert unwrap_record({"data": None, "message": "deleted"}) == {"data": None, "message": "deleted"}
