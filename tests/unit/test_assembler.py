"""Tests for feature assembly shared by both decoders."""

from __future__ import annotations

import pytest

from geoingest.core.exceptions import (
    EmptyResultError,
    MalformedGeometryError,
    NoGeometryError,
    RecordError,
)
from geoingest.models.geometry import Polygon, UnsupportedGeometry
from geoingest.parsers.assemble import FeatureAssembler, decode_records, resolve_feature_id

TRIANGLE = Polygon(rings=(((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (0.0, 0.0)),))


class TestResolveFeatureId:
    def test_id_first(self) -> None:
        assert resolve_feature_id({"id": "a", "fid": "b"}, 1) == "a"

    def test_fid_fallback(self) -> None:
        assert resolve_feature_id({"fid": "b"}, 1) == "b"

    def test_numeric_id_stringified(self) -> None:
        assert resolve_feature_id({"id": 12}, 1) == "12"

    def test_zero_is_a_valid_id(self) -> None:
        assert resolve_feature_id({"id": 0}, 3) == "0"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_falls_back_to_position(self, value) -> None:
        assert resolve_feature_id({"id": value}, 3) == "feature-3"

    def test_custom_keys(self) -> None:
        attrs = {"id": "x", "identyfikator": "PL.1"}
        assert resolve_feature_id(attrs, 1, ("identyfikator", "id")) == "PL.1"


class TestDecodeRecords:
    def test_indices_are_one_based(self) -> None:
        seen: list[int] = []

        def decode(index: int, record: str) -> Polygon:
            seen.append(index)
            return TRIANGLE

        decode_records(["a", "b", "c"], decode)
        assert seen == [1, 2, 3]

    def test_record_error_returned_with_index(self) -> None:
        def decode(index: int, record: str) -> Polygon:
            if record == "bad":
                raise MalformedGeometryError("nope")
            return TRIANGLE

        outcomes = decode_records(["ok", "bad"], decode)
        assert outcomes[0] is TRIANGLE
        assert isinstance(outcomes[1], MalformedGeometryError)
        assert outcomes[1].record_index == 2

    def test_existing_index_kept(self) -> None:
        def decode(index: int, record: str) -> Polygon:
            raise NoGeometryError("x", record_index=99)

        assert decode_records(["a"], decode)[0].record_index == 99

    def test_other_exceptions_propagate(self) -> None:
        def decode(index: int, record: str) -> Polygon:
            raise KeyError(record)

        with pytest.raises(KeyError):
            decode_records(["a", "b"], decode, max_workers=2)

    def test_threaded_results_in_source_order(self) -> None:
        def decode(index: int, record: int) -> UnsupportedGeometry:
            return UnsupportedGeometry(record)

        outcomes = decode_records(list(range(50)), decode, max_workers=8)
        assert [o.type_code for o in outcomes] == list(range(50))


class TestFeatureAssembler:
    def test_manifest_seeded_with_id_and_geometry(self) -> None:
        assembler = FeatureAssembler()
        assembler.add(1, TRIANGLE, {"name": "n", "id": "x"})
        assert assembler.result().column_manifest == ["id", "geometry", "name"]

    def test_rejected_record_keys_reach_manifest(self) -> None:
        assembler = FeatureAssembler()
        assembler.add(1, MalformedGeometryError("bad"), {"only_on_failure": "y"})
        assembler.add(2, TRIANGLE, {"name": "n"})
        assert assembler.result().column_manifest == ["id", "geometry", "only_on_failure", "name"]

    def test_outcome_classification(self) -> None:
        assembler = FeatureAssembler()
        assert assembler.add(1, None, {}) is None
        assert assembler.add(2, NoGeometryError("none"), {}) is None
        assert assembler.add(3, MalformedGeometryError("bad"), {}) is None
        assert assembler.add(4, UnsupportedGeometry(2), {}) is None
        assert assembler.add(5, TRIANGLE, {}) is not None

        diagnostics = assembler.result().diagnostics
        assert (diagnostics.skipped, diagnostics.failed, diagnostics.unsupported) == (2, 1, 1)
        assert diagnostics.messages[2] == "Could not parse geometry for feature 3: bad"

    def test_feature_attributes_include_id(self) -> None:
        assembler = FeatureAssembler()
        feature = assembler.add(4, TRIANGLE, {"name": "n"})
        assert feature.id == "feature-4"
        assert feature.attributes == {"name": "n", "id": "feature-4"}

    def test_rows_match_features(self) -> None:
        assembler = FeatureAssembler()
        assembler.add(1, TRIANGLE, {"id": "a"})
        assembler.add(2, TRIANGLE, {"id": "b"})
        result = assembler.result()
        assert [r["id"] for r in result.rows] == ["a", "b"]

    def test_result_diagnostics_are_a_copy(self) -> None:
        assembler = FeatureAssembler()
        assembler.add(1, None, {})
        assembler.add(2, TRIANGLE, {})
        first = assembler.result()
        assembler.add(3, None, {})
        assert first.diagnostics.skipped == 1

    def test_notice_duration_carried_to_diagnostics(self) -> None:
        assembler = FeatureAssembler(notice_duration_ms=7000)
        assembler.add(1, None, {})
        assembler.add(2, TRIANGLE, {})
        assert assembler.result().diagnostics.to_notice().display_duration_ms == 7000

    def test_empty_result_raises(self) -> None:
        assembler = FeatureAssembler(source="data.csv", empty_message="Nothing here")
        assembler.add(1, None, {})
        with pytest.raises(EmptyResultError, match="Nothing here in data.csv"):
            assembler.result()

    def test_record_errors_are_not_batch_errors(self) -> None:
        assert not issubclass(EmptyResultError, RecordError)
