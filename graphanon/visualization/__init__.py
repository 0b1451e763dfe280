"""Figures for anonymization runs."""

from graphanon.visualization.convergence import plot_convergence
from graphanon.visualization.style import apply_style, save_figure

__all__ = ["apply_style", "plot_convergence", "save_figure"]
