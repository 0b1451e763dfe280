"""Run configuration: frozen, hashable, JSON-serializable dataclasses."""

from graphanon.config.experiment import (
    STRATEGIES,
    AnonymizationConfig,
    GraphConfig,
    ProximityConfig,
)
from graphanon.config.defaults import DEFAULT_CONFIG
from graphanon.config.hashing import config_hash, full_config_hash, input_config_hash
from graphanon.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "AnonymizationConfig",
    "DEFAULT_CONFIG",
    "GraphConfig",
    "ProximityConfig",
    "STRATEGIES",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "full_config_hash",
    "input_config_hash",
]
