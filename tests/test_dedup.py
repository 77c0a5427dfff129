"""
tests/test_dedup.py

Fingerprint determinism and dedup-merge behaviour.
"""

from __future__ import annotations

from datetime import date

from app.consolidation.dedup import dedupe_batch, merge_records
from app.consolidation.fingerprint import record_fingerprint


class TestRecordFingerprint:
    def test_key_order_does_not_matter(self) -> None:
        assert record_fingerprint({"a": 1, "b": "x"}) == record_fingerprint({"b": "x", "a": 1})

    def test_null_fields_are_significant(self) -> None:
        assert record_fingerprint({"a": 1}) != record_fingerprint({"a": 1, "b": None})

    def test_integral_float_matches_int(self) -> None:
        assert record_fingerprint({"qty": 10.0}) == record_fingerprint({"qty": 10})

    def test_nan_matches_null(self) -> None:
        assert record_fingerprint({"qty": float("nan")}) == record_fingerprint({"qty": None})

    def test_date_matches_iso_string(self) -> None:
        assert record_fingerprint({"d": date(2024, 1, 2)}) == record_fingerprint({"d": "2024-01-02"})

    def test_string_and_number_differ(self) -> None:
        assert record_fingerprint({"qty": "10"}) != record_fingerprint({"qty": 10})


class TestDedupeBatch:
    def test_skips_records_already_stored(self) -> None:
        existing = [{"id": 1}, {"id": 2}]
        unique, duplicates = dedupe_batch(existing, [{"id": 2}, {"id": 3}])

        assert unique == [{"id": 3}]
        assert duplicates == 1

    def test_skips_repeats_inside_the_batch(self) -> None:
        unique, duplicates = dedupe_batch([], [{"id": 1}, {"id": 1}, {"id": 2}, {"id": 1}])

        assert unique == [{"id": 1}, {"id": 2}]
        assert duplicates == 2


class TestMergeRecords:
    def test_existing_then_unique_in_input_order(self) -> None:
        result = merge_records([{"id": 1}], [{"id": 3}, {"id": 1}, {"id": 2}])

        assert list(result.records) == [{"id": 1}, {"id": 3}, {"id": 2}]
        assert result.added == 2
        assert result.duplicates == 1

    def test_merging_the_same_batch_twice_is_idempotent(self) -> None:
        batch = [{"id": 1, "city": "Pune"}, {"id": 2, "city": None}]
        first = merge_records([], batch)
        second = merge_records(first.records, batch)

        assert second.records == first.records
        assert second.added == 0
        assert second.duplicates == 2

    def test_does_not_mutate_inputs(self) -> None:
        existing = [{"id": 1}]
        incoming = [{"id": 2}]
        merge_records(existing, incoming)

        assert existing == [{"id": 1}]
        assert incoming == [{"id": 2}]
