"""Run configuration dataclasses, all frozen and slotted for immutability."""

from dataclasses import dataclass, field

from graphanon.graph.errors import ConfigurationError
from graphanon.graph.labelled import MAX_LABELS
from graphanon.graph.labels import LABEL_ASSIGNMENT_METHODS

STRATEGIES: tuple[str, ...] = ("hopeful", "greedy")


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Input graph parameters (used when no graph file is given)."""

    n: int = 100  # number of vertices
    num_labels: int = 4  # label alphabet size l (<= 32)
    num_edges: int = 150  # random edges in the generated input graph
    label_assignment: str = "even"  # "even", "random", or "input"

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ConfigurationError(f"n must be positive, got {self.n}")
        if not 1 <= self.num_labels <= MAX_LABELS:
            raise ConfigurationError(
                f"num_labels must be in [1, {MAX_LABELS}], got {self.num_labels}"
            )
        if self.num_edges < 0:
            raise ConfigurationError(
                f"num_edges must be non-negative, got {self.num_edges}"
            )
        if self.label_assignment not in LABEL_ASSIGNMENT_METHODS:
            raise ConfigurationError(
                f"label_assignment must be one of {LABEL_ASSIGNMENT_METHODS}, "
                f"got {self.label_assignment!r}"
            )


@dataclass(frozen=True, slots=True)
class ProximityConfig:
    """Alpha-proximity target and strategy parameters."""

    alpha: float = 0.2
    strategy: str = "greedy"  # "hopeful" or "greedy"
    max_edges: int | None = None  # ceiling on inserted edges
    max_iterations: int | None = None  # ceiling on greedy iterations

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha <= 1.0:
            raise ConfigurationError(f"alpha must be in [0, 1], got {self.alpha}")
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"strategy must be one of {STRATEGIES}, got {self.strategy!r}"
            )
        if self.max_edges is not None and self.max_edges < 0:
            raise ConfigurationError(
                f"max_edges must be non-negative, got {self.max_edges}"
            )
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ConfigurationError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )


@dataclass(frozen=True, slots=True)
class AnonymizationConfig:
    """Top-level run configuration composing all sub-configs.

    Field-level checks run in each sub-config's __post_init__; cross-field
    checks run here so invalid combinations are rejected early.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    proximity: ProximityConfig = field(default_factory=ProximityConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        max_edges = self.graph.n * (self.graph.n - 1) // 2
        if self.graph.num_edges > max_edges:
            raise ConfigurationError(
                f"num_edges ({self.graph.num_edges}) exceeds the "
                f"{max_edges} edges of K_{self.graph.n}"
            )
        if self.seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {self.seed}")
