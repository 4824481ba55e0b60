from typing import Any, Dict, List, Optional, Tuple

DEFAULT_RESULT_LIMIT = 1000
DEFAULT_MAX_TIME_MS = 30000
DEFAULT_SAMPLE_SIZE = 5
MIN_SAMPLE_SIZE = 1
MAX_SAMPLE_SIZE = 10
DEFAULT_VERBOSITY = "queryPlanner"

def has_limit_stage(pipeline: List[Dict[str, Any]]) -> bool:
    return any("$limit" in stage for stage in pipeline)

def safe_aggregate(
    pipeline: List[Dict[str, Any]],
    options: Optional[Dict[str, Any]] = None
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """Bound an aggregation: cap the result set and always set a time limit"""
    safe_pipeline = list(pipeline)
    if not has_limit_stage(safe_pipeline):
        safe_pipeline.append({"$limit": DEFAULT_RESULT_LIMIT})

    safe_options = dict(options or {})
    safe_options["maxTimeMS"] = safe_options.get("maxTimeMS") or DEFAULT_MAX_TIME_MS

    return safe_pipeline, safe_options

def safe_sample_size(count: Optional[float] = None) -> int:
    # Clamped here as well as validated, so a relaxed validator can't widen it
    if count is None:
        count = DEFAULT_SAMPLE_SIZE
    return int(min(max(MIN_SAMPLE_SIZE, count), MAX_SAMPLE_SIZE))

def explain_verbosity(verbosity: Optional[str] = None) -> str:
    return verbosity or DEFAULT_VERBOSITY
