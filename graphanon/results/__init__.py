"""Result schema validation, writing, and run ID generation."""

from graphanon.results.run_id import generate_run_id
from graphanon.results.schema import (
    build_metrics,
    load_result,
    validate_result,
    write_result,
)

__all__ = [
    "build_metrics",
    "generate_run_id",
    "load_result",
    "validate_result",
    "write_result",
]
