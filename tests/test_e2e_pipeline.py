"""Integration tests for the end-to-end anonymization runner.

Runs the full pipeline on tiny graphs: graph loading/generation, label
assignment, strategy, graph output, result.json, and the figure.
"""

import json
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from graphanon.config import AnonymizationConfig, GraphConfig, ProximityConfig
from graphanon.config.serialization import config_to_json
from graphanon.graph import read_graph
from graphanon.proximity import is_alpha_proximal
from graphanon.results import load_result
from run_anonymization import main, run_pipeline

REPO_ROOT = Path(__file__).resolve().parent.parent

TINY_CONFIG = AnonymizationConfig(
    graph=GraphConfig(n=24, num_labels=3, num_edges=20, label_assignment="even"),
    proximity=ProximityConfig(alpha=0.3, strategy="greedy"),
    seed=42,
    description="E2E pipeline test",
    tags=("test", "e2e"),
)

SQUARE = "4 2\n0\n0\n1\n1\n"


def _write_config(tmp_path: Path, config: AnonymizationConfig = TINY_CONFIG) -> Path:
    config_path = tmp_path / "config.json"
    config_path.write_text(config_to_json(config))
    return config_path


class TestRunPipeline:

    def test_generated_graph_run(self, tmp_path: Path) -> None:
        run_id, result = run_pipeline(TINY_CONFIG, results_dir=tmp_path)
        out_dir = tmp_path / run_id
        assert result.converged
        graph = read_graph(out_dir / "graph.txt")
        assert is_alpha_proximal(graph, 0.3)

        data = load_result(out_dir / "result.json")
        assert data["metrics"]["scalars"]["converged"] is True
        assert data["metrics"]["scalars"]["edges_added"] == result.edges_added
        assert data["metrics"]["scalars"]["output_edges"] == graph.edge_count()
        assert data["tags"] == ["test", "e2e"]

        npz = np.load(out_dir / "vertex_metrics.npz")
        assert npz["neighbourhood_distance"].shape == (24,)
        assert (npz["neighbourhood_distance"] <= 0.3).all()

    def test_input_file_run(self, tmp_path: Path) -> None:
        input_path = tmp_path / "square.txt"
        input_path.write_text(SQUARE)
        output_path = tmp_path / "anon.txt"
        config = AnonymizationConfig(
            graph=GraphConfig(label_assignment="input"),
            proximity=ProximityConfig(alpha=0.2, strategy="hopeful"),
        )
        run_id, result = run_pipeline(config, input_path, output_path, tmp_path)
        assert run_id.startswith("n4_l2_a0.2_hopeful_s42_")
        graph = read_graph(output_path)
        assert graph.labels().tolist() == [0, 0, 1, 1]
        assert is_alpha_proximal(graph, 0.2)
        assert result.edges_added == graph.edge_count()

    def test_plot_written(self, tmp_path: Path) -> None:
        run_id, _ = run_pipeline(TINY_CONFIG, results_dir=tmp_path, plot=True)
        assert (tmp_path / run_id / "figures" / "convergence.png").exists()

    def test_ceiling_reports_non_convergence(self, tmp_path: Path) -> None:
        config = AnonymizationConfig(
            graph=GraphConfig(n=24, num_labels=3, num_edges=0),
            proximity=ProximityConfig(alpha=0.0, strategy="hopeful", max_edges=3),
        )
        run_id, result = run_pipeline(config, results_dir=tmp_path)
        assert not result.converged
        data = load_result(tmp_path / run_id / "result.json")
        assert data["metrics"]["scalars"]["status"] == "did not converge"
        assert data["metrics"]["scalars"]["edges_added"] == 3


class TestMain:

    def test_main_with_config(self, tmp_path: Path, capsys) -> None:
        config_path = _write_config(tmp_path)
        main(["--config", str(config_path), "--results-dir", str(tmp_path / "results")])
        out = capsys.readouterr().out
        assert "Status:       converged" in out
        assert len(list((tmp_path / "results").glob("*/result.json"))) == 1

    def test_main_overrides(self, tmp_path: Path, capsys) -> None:
        input_path = tmp_path / "square.txt"
        input_path.write_text(SQUARE)
        main([
            "--input", str(input_path),
            "--output", str(tmp_path / "anon.txt"),
            "--alpha", "0.2",
            "--strategy", "greedy",
            "--seed", "3",
            "--results-dir", str(tmp_path / "results"),
        ])
        assert (tmp_path / "anon.txt").exists()
        result_path = next((tmp_path / "results").glob("*/result.json"))
        data = json.loads(result_path.read_text())
        assert data["config"]["seed"] == 3
        assert data["config"]["graph"]["label_assignment"] == "input"
        assert data["config"]["graph"]["n"] == 4

    def test_dry_run(self, tmp_path: Path, capsys) -> None:
        main(["--dry-run", "--results-dir", str(tmp_path)])
        assert "[dry-run]" in capsys.readouterr().out
        assert not any(tmp_path.iterdir())

    def test_missing_input_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(tmp_path / "missing.txt")])
        assert exc.value.code == 1

    def test_malformed_input_exits(self, tmp_path: Path, capsys) -> None:
        bad = tmp_path / "bad.txt"
        bad.write_text("0 2\n")
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(bad), "--results-dir", str(tmp_path)])
        assert exc.value.code == 1
        assert "positive number of vertices" in capsys.readouterr().err

    def test_invalid_alpha_exits(self, tmp_path: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--alpha", "2.0", "--dry-run"])
        assert exc.value.code == 1
        assert "alpha" in capsys.readouterr().err

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"graph": {"num_labels": 64}}))
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path), "--dry-run"])
        assert exc.value.code == 1


class TestScript:

    def test_dry_run_subprocess(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path)
        proc = subprocess.run(
            [sys.executable, str(REPO_ROOT / "run_anonymization.py"),
             "--config", str(config_path), "--dry-run"],
            capture_output=True,
            text=True,
            cwd=REPO_ROOT,
        )
        assert proc.returncode == 0, proc.stderr
        assert "Strategy: greedy, alpha=0.3" in proc.stdout
