#!/usr/bin/env python3
"""Entry point for anonymizing a labelled graph against NAD attacks.

Chains the run stages into a single command:
graph loading/generation -> label assignment -> alpha-proximity strategy ->
anonymized graph output -> result.json -> (optional) convergence figure.

Usage:
    python run_anonymization.py --input graph.txt --output anon.txt --alpha 0.2
    python run_anonymization.py --config config.json --strategy hopeful
    python run_anonymization.py --config config.json --dry-run
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator, Sequence

import numpy as np
from dacite import DaciteError

from graphanon.config import (
    DEFAULT_CONFIG,
    STRATEGIES,
    AnonymizationConfig,
    config_from_json,
    full_config_hash,
)
from graphanon.graph import (
    LABEL_ASSIGNMENT_METHODS,
    GraphAnonError,
    LabelledGraph,
    assign_labels,
    generate_random_graph,
    read_graph,
    write_graph,
)
from graphanon.proximity import (
    AnonymizationResult,
    anonymize,
    neighbourhood_distances,
)
from graphanon.reproducibility import make_rng
from graphanon.results import build_metrics, generate_run_id, write_result

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def apply_overrides(
    config: AnonymizationConfig, args: argparse.Namespace
) -> AnonymizationConfig:
    """Fold command-line overrides into the loaded config (revalidating it)."""
    proximity = config.proximity
    if args.alpha is not None:
        proximity = replace(proximity, alpha=args.alpha)
    if args.strategy is not None:
        proximity = replace(proximity, strategy=args.strategy)
    if args.max_edges is not None:
        proximity = replace(proximity, max_edges=args.max_edges)

    graph = config.graph
    labels = args.labels
    if labels is None and args.input is not None:
        labels = "input"
    if labels is not None:
        graph = replace(graph, label_assignment=labels)

    seed = config.seed if args.seed is None else args.seed
    return replace(config, graph=graph, proximity=proximity, seed=seed)


def prepare_graph(
    config: AnonymizationConfig, input_path: Path | None, rng: np.random.Generator
) -> tuple[AnonymizationConfig, LabelledGraph]:
    """Load or generate the input graph and assign its labels.

    When a graph file is given, the config's graph section is rewritten to
    describe the file so the run id and result.json reflect the real input.
    """
    if input_path is not None:
        graph = read_graph(input_path)
        config = replace(
            config,
            graph=replace(
                config.graph,
                n=graph.vertex_count(),
                num_labels=graph.label_count(),
                num_edges=graph.edge_count(),
            ),
        )
    else:
        graph = generate_random_graph(
            config.graph.n, config.graph.num_labels, config.graph.num_edges, rng
        )

    assign_labels(graph, config.graph.label_assignment, rng)
    return config, graph


def run_pipeline(
    config: AnonymizationConfig,
    input_path: Path | None = None,
    output_path: Path | None = None,
    results_dir: str | Path = "results",
    plot: bool = False,
) -> tuple[str, AnonymizationResult]:
    """Execute a full anonymization run.

    Args:
        config: Run configuration (after overrides).
        input_path: Optional graph file; a random graph is generated otherwise.
        output_path: Where to write the anonymized graph. Defaults to
            results/{run_id}/graph.txt.
        results_dir: Base directory for result output.
        plot: Also render the convergence figure.

    Returns:
        (run_id, AnonymizationResult) tuple.
    """
    pipeline_start = time.monotonic()
    rng = make_rng(config.seed)

    with stage_timer("Input Graph"):
        config, graph = prepare_graph(config, input_path, rng)
        input_edges = graph.edge_count()
        log.info("Input graph: %r", graph)

    run_id = generate_run_id(config)
    output_dir = Path(results_dir) / run_id

    with stage_timer(f"Anonymization ({config.proximity.strategy})"):
        result = anonymize(graph, config.proximity, rng)

    with stage_timer("Write Graph"):
        if output_path is None:
            output_path = output_dir / "graph.txt"
        write_graph(graph, output_path)

    with stage_timer("Write Result JSON"):
        write_result(
            config,
            build_metrics(result, input_edges, graph.edge_count()),
            metadata={"output_graph": str(output_path)},
            vertex_metrics={
                "labels": graph.labels(),
                "neighbourhood_distance": neighbourhood_distances(graph),
            },
            results_dir=results_dir,
            run_id=run_id,
        )

    if plot:
        from graphanon.visualization import plot_convergence, save_figure

        with stage_timer("Visualization"):
            fig = plot_convergence(result.trace, result.alpha, result.strategy)
            save_figure(fig, output_dir / "figures", "convergence")

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Run complete in {total_elapsed:.1f}s")
    print(f"  Run:          {run_id}")
    print(f"  Status:       {result.status}")
    print(f"  Edges added:  {result.edges_added} ({input_edges} -> {graph.edge_count()})")
    print(f"  Max distance: {result.initial_max_distance:.4f} -> "
          f"{result.final_max_distance:.4f} (alpha={result.alpha:g})")
    print(f"  Graph:        {output_path}")
    print(f"  Result:       {output_dir / 'result.json'}")
    print(f"{'=' * 60}")

    return run_id, result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Add edges to a labelled graph until it is alpha-proximal"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to run config JSON file (defaults built in)",
    )
    parser.add_argument(
        "--input", type=str, default=None,
        help="Graph file in 'n l' adjacency format (random graph if omitted)",
    )
    parser.add_argument(
        "--output", type=str, default=None,
        help="Where to write the anonymized graph",
    )
    parser.add_argument("--alpha", type=float, default=None, help="Proximity tolerance")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None)
    parser.add_argument("--labels", choices=LABEL_ASSIGNMENT_METHODS, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--max-edges", type=int, default=None,
        help="Stop after inserting this many edges",
    )
    parser.add_argument("--results-dir", type=str, default="results")
    parser.add_argument(
        "--plot", action="store_true", help="Render the convergence figure",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show the run plan without modifying any graph",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable DEBUG-level logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input) if args.input else None
    if input_path is not None and not input_path.exists():
        print(f"Error: graph file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.config is not None:
            config_path = Path(args.config)
            if not config_path.exists():
                print(f"Error: config file not found: {config_path}", file=sys.stderr)
                sys.exit(1)
            config = config_from_json(config_path.read_text())
        else:
            config = DEFAULT_CONFIG
        config = apply_overrides(config, args)
    except (GraphAnonError, DaciteError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Config hash: {full_config_hash(config)}")
    if input_path is not None:
        print(f"Input:    {input_path}")
    else:
        print(f"Input:    random graph n={config.graph.n}, "
              f"l={config.graph.num_labels}, edges={config.graph.num_edges}")
    print(f"Labels:   {config.graph.label_assignment}")
    print(f"Strategy: {config.proximity.strategy}, alpha={config.proximity.alpha:g}, "
          f"max_edges={config.proximity.max_edges}")
    print(f"Seed:     {config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    output_path = Path(args.output) if args.output else None
    try:
        run_pipeline(config, input_path, output_path, args.results_dir, args.plot)
    except GraphAnonError as e:
        log.error("Run failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
