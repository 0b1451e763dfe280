"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from graphanon.config.experiment import AnonymizationConfig


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional top-level field names to leave out.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    for name in exclude_fields or ():
        d.pop(name, None)
    serialized = json.dumps(d, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def input_config_hash(config: AnonymizationConfig) -> str:
    """Hash identifying the input graph: graph parameters plus seed.

    Runs that differ only in proximity settings share this hash, so their
    results can be compared on the same input.
    """
    return config_hash(config, exclude_fields=["proximity", "description", "tags"])


def full_config_hash(config: AnonymizationConfig) -> str:
    """Hash for full run identity, including everything."""
    return config_hash(config)
