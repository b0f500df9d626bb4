import numpy as np
import pytest

from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.application.services.segments import (
    FlowSegmentBuilder,
    label_segments,
    make_segment_id,
)
from trade_arcs.domain.exceptions import (
    InvalidCoordinateException,
    InvalidParameterException,
    RecordProcessingException,
)
from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord
from tests.mocks import FixedPartsInterpolator


def record(src_lon, src_lat, dst_lon, dst_lat, value=1.0):
    return TradeFlowRecord(GeoPoint(src_lon, src_lat), GeoPoint(dst_lon, dst_lat), value)


class TestSegmentIds:
    def test_plain_and_composite_forms(self):
        assert make_segment_id(5) == "5"
        assert make_segment_id(5, 1) == "5-1"
        assert make_segment_id(12, 3) == "12-3"

    def test_plain_index_never_equals_composite(self):
        plain = {make_segment_id(i) for i in range(200)}
        composite = {make_segment_id(i, j) for i in range(200) for j in range(1, 4)}
        assert plain.isdisjoint(composite)

    def test_label_single_piece(self):
        (segment,) = label_segments(3, [np.array([[0.0, 0.0], [1.0, 1.0]])])
        assert segment.segment_id == "3"
        assert segment.record_index == 3

    def test_label_split_pieces_count_from_one(self):
        pieces = [np.array([[0.0, 0.0], [1.0, 1.0]])] * 2
        assert [s.segment_id for s in label_segments(7, pieces)] == ["7-1", "7-2"]


class TestFlowSegmentBuilder:
    def test_one_plus_three_segments_are_distinct(self):
        """Record 0 draws as one piece and record 1 as three."""
        interpolator = FixedPartsInterpolator({20.0: 3})
        builder = FlowSegmentBuilder(interpolator)

        batch = builder.build([record(0.0, 0.0, 1.0, 1.0), record(20.0, 0.0, 21.0, 1.0)])

        ids = batch.segment_ids()
        assert ids == ["0", "1-1", "1-2", "1-3"]
        assert len(set(ids)) == 4
        assert "0" not in ids[1:]

    def test_split_index_does_not_collide_with_later_plain_index(self):
        interpolator = FixedPartsInterpolator({1.0: 2})
        records = [record(float(i), 0.0, float(i) + 1, 1.0) for i in range(12)]

        ids = FlowSegmentBuilder(interpolator).build(records).segment_ids()

        assert "1-1" in ids and "1-2" in ids and "11" in ids
        assert len(ids) == len(set(ids)) == 13

    def test_real_interpolator_crossing(self):
        builder = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=20))
        batch = builder.build(
            [record(0.0, 0.0, 10.0, 10.0), record(170.0, 0.0, -170.0, 0.0)]
        )

        assert batch.segment_ids() == ["0", "1-1", "1-2"]
        assert [curve.crosses_antimeridian for curve in batch.curves] == [False, True]

    def test_iteration_yields_segment_and_record_index(self):
        interpolator = FixedPartsInterpolator({5.0: 2})
        batch = FlowSegmentBuilder(interpolator).build(
            [record(0.0, 0.0, 1.0, 1.0), record(5.0, 0.0, 6.0, 1.0)]
        )

        pairs = [(segment.segment_id, index) for segment, index in batch]
        assert pairs == [("0", 0), ("1-1", 1), ("1-2", 1)]

    def test_empty_input(self):
        batch = FlowSegmentBuilder(FixedPartsInterpolator({})).build([])
        assert len(batch) == 0
        assert batch.curves == []
        assert batch.errors == []

    def test_sample_count_is_forwarded(self):
        interpolator = FixedPartsInterpolator({})
        FlowSegmentBuilder(interpolator, sample_count=7).build([record(0.0, 0.0, 1.0, 1.0)])
        assert interpolator.calls[0][2] == 7

    def test_input_records_are_not_modified(self):
        records = [record(0.0, 0.0, 1.0, 1.0), record(170.0, 0.0, -170.0, 0.0)]
        snapshot = list(records)
        FlowSegmentBuilder(GreatCircleInterpolator(sample_count=5)).build(records)
        assert records == snapshot


class TestErrorPolicy:
    def test_bad_record_is_collected_and_batch_continues(self):
        builder = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=5))
        batch = builder.build(
            [
                record(0.0, 0.0, 1.0, 1.0),
                record(0.0, 95.0, 1.0, 1.0),
                record(2.0, 2.0, 3.0, 3.0),
            ]
        )

        assert batch.segment_ids() == ["0", "2"]
        assert len(batch.errors) == 1
        assert batch.errors[0].record_index == 1
        assert isinstance(batch.errors[0].error, InvalidCoordinateException)

    def test_fail_fast_raises_with_record_index(self):
        builder = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=5), fail_fast=True)
        with pytest.raises(RecordProcessingException) as exc_info:
            builder.build([record(0.0, 0.0, 1.0, 1.0), record(0.0, 0.0, 200.0, 1.0)])

        assert exc_info.value.record_index == 1
        assert isinstance(exc_info.value.__cause__, InvalidCoordinateException)
        assert "Record 1" in str(exc_info.value)

    def test_antipodal_record_is_collected(self):
        builder = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=5))
        batch = builder.build([record(0.0, 0.0, 180.0, 0.0)])
        assert batch.curves == []
        assert batch.errors[0].record_index == 0

    @pytest.mark.parametrize("kwargs", [{"sample_count": 1}, {"max_workers": 0}])
    def test_invalid_builder_parameters(self, kwargs):
        with pytest.raises(InvalidParameterException):
            FlowSegmentBuilder(GreatCircleInterpolator(), **kwargs)


class TestParallelBuild:
    def test_thread_pool_matches_sequential(self):
        records = [
            record(-73.94, 40.67, 2.35, 48.86),
            record(121.47, 31.23, -118.24, 34.05),
            record(0.0, 91.0, 0.0, 0.0),
            record(151.21, -33.87, -70.65, -33.45),
            record(10.0, 10.0, 20.0, 20.0),
        ]
        interpolator = GreatCircleInterpolator(sample_count=30)

        sequential = FlowSegmentBuilder(interpolator).build(records)
        parallel = FlowSegmentBuilder(interpolator, max_workers=4).build(records)

        assert parallel.segment_ids() == sequential.segment_ids()
        assert [e.record_index for e in parallel.errors] == [2]
        for a, b in zip(parallel.segments, sequential.segments):
            assert np.array_equal(a.points, b.points)

    def test_thread_pool_fail_fast(self):
        builder = FlowSegmentBuilder(
            GreatCircleInterpolator(sample_count=5), fail_fast=True, max_workers=2
        )
        with pytest.raises(RecordProcessingException) as exc_info:
            builder.build([record(0.0, 0.0, 1.0, 1.0), record(0.0, -100.0, 1.0, 1.0)])
        assert exc_info.value.record_index == 1


def test_to_rows_groups_points_by_segment():
    builder = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=4))
    batch = builder.build([record(170.0, 0.0, -170.0, 0.0)])

    rows = batch.to_rows()
    assert len(rows) == sum(len(segment) for segment in batch.segments)
    assert {row[2] for row in rows} == {"0-1", "0-2"}
    assert rows[0][:2] == (170.0, 0.0)
    assert all(row[3] == 0 for row in rows)
