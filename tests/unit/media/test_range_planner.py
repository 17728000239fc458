import pytest

from video_server.media.errors import RangeNotSatisfiableError
from video_server.media.range_planner import plan_stream
from video_server.media.types import ABSENT
from video_server.media.types import RangeMalformed
from video_server.media.types import RangeParsed


def test_absent_range_plans_full_file():
    plan = plan_stream(ABSENT, 1000)

    assert plan.status_code == 200
    assert plan.content_range is None
    assert plan.content_length == 1000
    assert (plan.start, plan.end) == (0, 999)


def test_malformed_range_degrades_to_full_file():
    plan = plan_stream(RangeMalformed(reason="bad"), 1000)

    assert plan.status_code == 200
    assert plan.content_range is None
    assert plan.content_length == 1000


def test_open_ended_from_zero():
    plan = plan_stream(RangeParsed(start=0), 1000)

    assert plan.status_code == 206
    assert plan.content_range == (0, 999, 1000)
    assert plan.content_length == 1000


def test_explicit_window():
    plan = plan_stream(RangeParsed(start=500, end=999), 1000)

    assert plan.status_code == 206
    assert plan.content_range == (500, 999, 1000)
    assert plan.content_length == 500
    assert plan.window.length == plan.content_length


def test_single_byte():
    plan = plan_stream(RangeParsed(start=999, end=999), 1000)

    assert plan.content_range == (999, 999, 1000)
    assert plan.content_length == 1


def test_end_past_eof_is_clamped():
    plan = plan_stream(RangeParsed(start=900, end=5000), 1000)

    assert plan.content_range == (900, 999, 1000)
    assert plan.content_length == 100


@pytest.mark.parametrize("start", [1000, 1001, 10**12])
def test_start_at_or_past_eof_is_not_satisfiable(start):
    with pytest.raises(RangeNotSatisfiableError) as exc_info:
        plan_stream(RangeParsed(start=start), 1000)
    assert exc_info.value.status_code == 416
    assert exc_info.value.file_size == 1000


def test_suffix_range():
    plan = plan_stream(RangeParsed(suffix_length=100), 1000)

    assert plan.content_range == (900, 999, 1000)
    assert plan.content_length == 100


def test_suffix_longer_than_file_covers_whole_file():
    plan = plan_stream(RangeParsed(suffix_length=5000), 1000)

    assert plan.status_code == 206
    assert plan.content_range == (0, 999, 1000)
    assert plan.content_length == 1000


def test_empty_file_without_range():
    plan = plan_stream(ABSENT, 0)

    assert plan.status_code == 200
    assert plan.content_length == 0


@pytest.mark.parametrize("rng", [RangeParsed(start=0), RangeParsed(suffix_length=10)])
def test_empty_file_with_range_is_not_satisfiable(rng):
    with pytest.raises(RangeNotSatisfiableError):
        plan_stream(rng, 0)


def test_plans_are_immutable():
    plan = plan_stream(ABSENT, 10)
    with pytest.raises(AttributeError):
        plan.start = 5  # type: ignore[misc]
