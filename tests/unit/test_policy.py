import pytest

from mongodb_mcp.src.tools.policy import (
    DEFAULT_MAX_TIME_MS,
    explain_verbosity,
    has_limit_stage,
    safe_aggregate,
    safe_sample_size,
)


def test_limit_is_appended_when_missing():
    pipeline = [{"$match": {"status": "A"}}, {"$sort": {"total": -1}}]

    safe_pipeline, _ = safe_aggregate(pipeline)

    assert safe_pipeline == pipeline + [{"$limit": 1000}]
    # the caller's list is left alone
    assert len(pipeline) == 2


def test_empty_pipeline_gets_a_limit():
    safe_pipeline, _ = safe_aggregate([])
    assert safe_pipeline == [{"$limit": 1000}]


def test_existing_limit_is_kept_as_is():
    pipeline = [{"$match": {}}, {"$limit": 5}, {"$project": {"name": 1}}]

    safe_pipeline, _ = safe_aggregate(pipeline)

    assert safe_pipeline == pipeline


def test_has_limit_stage():
    assert has_limit_stage([{"$limit": 1}])
    assert not has_limit_stage([{"$match": {"$limit": 1}}])
    assert not has_limit_stage([{"$sort": {"a": 1}}])


def test_max_time_defaults():
    _, options = safe_aggregate([], None)
    assert options == {"maxTimeMS": DEFAULT_MAX_TIME_MS}


def test_max_time_from_caller_is_kept():
    _, options = safe_aggregate([], {"maxTimeMS": 500, "allowDiskUse": True, "comment": "report"})
    assert options == {"maxTimeMS": 500, "allowDiskUse": True, "comment": "report"}


def test_zero_max_time_falls_back_to_default():
    _, options = safe_aggregate([], {"maxTimeMS": 0})
    assert options["maxTimeMS"] == DEFAULT_MAX_TIME_MS


def test_options_are_copied():
    options = {"allowDiskUse": True}
    safe_aggregate([], options)
    assert options == {"allowDiskUse": True}


@pytest.mark.parametrize("count, expected", [
    (None, 5),
    (0, 1),
    (-7, 1),
    (0.2, 1),
    (1, 1),
    (3, 3),
    (3.7, 3),
    (10, 10),
    (11, 10),
    (500, 10),
])
def test_sample_size_is_clamped(count, expected):
    assert safe_sample_size(count) == expected


def test_explain_verbosity_default():
    assert explain_verbosity(None) == "queryPlanner"
    assert explain_verbosity("executionStats") == "executionStats"
