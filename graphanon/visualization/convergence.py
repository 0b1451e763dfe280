"""Convergence curve: worst-case neighbourhood distance per iteration."""

import matplotlib.pyplot as plt
import numpy as np

from graphanon.visualization.style import (
    GREEDY_COLOR,
    HOPEFUL_COLOR,
    THRESHOLD_COLOR,
    apply_style,
)


def plot_convergence(
    trace: list[float] | tuple[float, ...],
    alpha: float,
    strategy: str = "greedy",
) -> plt.Figure:
    """Plot the maximum neighbourhood distance against the alpha threshold.

    Args:
        trace: Maximum distance before the run and after each iteration
            (AnonymizationResult.trace).
        alpha: Proximity tolerance drawn as a reference line.
        strategy: Strategy name, used for colour and title.

    Returns:
        The matplotlib Figure.
    """
    apply_style()
    fig, ax = plt.subplots()

    color = HOPEFUL_COLOR if strategy == "hopeful" else GREEDY_COLOR
    if len(trace) > 0:
        steps = np.arange(len(trace))
        ax.plot(
            steps, trace, color=color, linewidth=1.5,
            marker="o" if len(trace) <= 50 else None, markersize=3,
            label="Max neighbourhood distance",
        )
    ax.axhline(
        alpha, color=THRESHOLD_COLOR, linestyle="--",
        label=f"alpha = {alpha:g}",
    )

    ax.set_xlabel("Edge insertions" if strategy == "hopeful" else "Greedy iteration")
    ax.set_ylabel("Total-variation distance")
    ax.set_title(f"Convergence ({strategy})")
    ax.set_ylim(0, 1.05)
    ax.legend()
    fig.tight_layout()
    return fig
