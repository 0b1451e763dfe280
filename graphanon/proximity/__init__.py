"""Alpha-proximity: label distributions, deficiency sets, and edge-insertion strategies."""

from graphanon.proximity.distribution import LabelDistribution
from graphanon.proximity.engine import (
    STRATEGIES,
    anonymize,
    global_distribution,
    greedy,
    hopeful,
    is_alpha_proximal,
    max_neighbourhood_distance,
    neighbourhood_distances,
    neighbourhood_distribution,
    run_greedy_iteration,
)
from graphanon.proximity.labelset import LabelSet
from graphanon.proximity.types import AnonymizationResult

__all__ = [
    "AnonymizationResult",
    "LabelDistribution",
    "LabelSet",
    "STRATEGIES",
    "anonymize",
    "global_distribution",
    "greedy",
    "hopeful",
    "is_alpha_proximal",
    "max_neighbourhood_distance",
    "neighbourhood_distances",
    "neighbourhood_distribution",
    "run_greedy_iteration",
]
