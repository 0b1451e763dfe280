"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from graphanon.config.experiment import AnonymizationConfig


def generate_run_id(config: AnonymizationConfig) -> str:
    """Generate a scannable run ID from config parameters.

    Format: n{n}_l{l}_a{alpha}_{strategy}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: n100_l4_a0.2_greedy_s42_20261017_143012
    """
    ts = datetime.now(timezone.utc)
    return (
        f"n{config.graph.n}"
        f"_l{config.graph.num_labels}"
        f"_a{config.proximity.alpha:g}"
        f"_{config.proximity.strategy}"
        f"_s{config.seed}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )
