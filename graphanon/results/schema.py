"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields
and types before writing result.json files.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from graphanon.config.experiment import AnonymizationConfig
from graphanon.config.hashing import full_config_hash, input_config_hash
from graphanon.proximity.types import AnonymizationResult
from graphanon.reproducibility.git_hash import get_git_hash
from graphanon.results.run_id import generate_run_id

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "metrics",
}

REQUIRED_SCALARS = {
    "alpha",
    "strategy",
    "converged",
    "edges_added",
    "final_max_distance",
}


def build_metrics(
    result: AnonymizationResult, input_edges: int, output_edges: int
) -> dict[str, Any]:
    """Assemble the metrics block of result.json from a strategy run."""
    return {
        "scalars": {
            "alpha": result.alpha,
            "strategy": result.strategy,
            "converged": result.converged,
            "status": result.status,
            "edges_added": result.edges_added,
            "iterations": result.iterations,
            "initial_max_distance": result.initial_max_distance,
            "final_max_distance": result.final_max_distance,
            "complete": result.complete,
            "hit_ceiling": result.hit_ceiling,
            "input_edges": input_edges,
            "output_edges": output_edges,
        },
        "curves": {"max_distance": list(result.trace)},
    }


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in result and not isinstance(result["tags"], list):
        errors.append("tags must be a list")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metrics = result.get("metrics")
    if metrics is not None:
        if not isinstance(metrics, dict):
            errors.append("metrics must be a dict")
        elif "scalars" not in metrics:
            errors.append("metrics.scalars is required")
        elif not isinstance(metrics["scalars"], dict):
            errors.append("metrics.scalars must be a dict")
        else:
            absent = REQUIRED_SCALARS - set(metrics["scalars"])
            if absent:
                errors.append(f"metrics.scalars missing fields: {sorted(absent)}")
            scalars = metrics["scalars"]
            alpha = scalars.get("alpha")
            final = scalars.get("final_max_distance")
            if (
                isinstance(alpha, (int, float))
                and isinstance(final, (int, float))
                and scalars.get("converged") is True
                and final > alpha
            ):
                errors.append(
                    f"metrics.scalars.converged is true but final_max_distance "
                    f"({final}) > alpha ({alpha})"
                )

        if isinstance(metrics, dict):
            curve = metrics.get("curves", {}).get("max_distance")
            if curve is not None and not isinstance(curve, list):
                errors.append("metrics.curves.max_distance must be a list")

    return errors


def write_result(
    config: AnonymizationConfig,
    metrics: dict[str, Any],
    metadata: dict[str, Any] | None = None,
    vertex_metrics: dict[str, np.ndarray] | None = None,
    results_dir: str | Path = "results",
    run_id: str | None = None,
) -> str:
    """Write result.json and optional vertex_metrics.npz.

    Creates results/{run_id}/ containing result.json, plus
    vertex_metrics.npz for per-vertex arrays when given.

    Args:
        config: The run configuration.
        metrics: Metrics dict (must include 'scalars').
        metadata: Optional additional metadata merged into the metadata block.
        vertex_metrics: Optional mapping of metric name to per-vertex array.
        results_dir: Base directory for result output.
        run_id: Pre-generated run id; generated from config when omitted.

    Returns:
        The run_id string.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    run_id = run_id or generate_run_id(config)
    out_dir = Path(results_dir) / run_id
    out_dir.mkdir(parents=True, exist_ok=True)

    result = {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "metrics": metrics,
        "metadata": {
            "seed": config.seed,
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "input_config_hash": input_config_hash(config),
            **(metadata or {}),
        },
    }

    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    with open(out_dir / "result.json", "w") as f:
        json.dump(result, f, indent=2)

    if vertex_metrics:
        np.savez_compressed(str(out_dir / "vertex_metrics.npz"), **vertex_metrics)

    return run_id


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded result fails validation.
    """
    path = Path(result_path)
    with open(path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Result validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return result
