"""Default configuration: single source of truth for default run parameters."""

from graphanon.config.experiment import AnonymizationConfig

# n=100, l=4, 150 random edges, even labels, alpha=0.2, greedy, seed=42.
DEFAULT_CONFIG = AnonymizationConfig()
