import json
from pathlib import Path

import yaml

from poisson_engine.cli.draw import main as run_draw_cli


def test_draw_cli_runs_and_writes_outputs(tmp_path: Path, capsys) -> None:
    output_dir = tmp_path / "draws"
    result_json = tmp_path / "result.json"
    exit_code = run_draw_cli(
        [
            "--mu",
            "25",
            "--n",
            "2000",
            "--seed",
            "123456789",
            "--output-dir",
            str(output_dir),
            "--result-json",
            str(result_json),
        ]
    )
    assert exit_code == 0
    assert (output_dir / "draws.parquet").exists()
    assert (output_dir / "summary.json").exists()

    summary = json.loads(result_json.read_text(encoding="utf-8"))
    assert summary["mu"] == 25.0
    assert summary["n"] == 2000
    assert "validation" in summary
    assert abs(summary["validation"]["mean_z"]) <= 5.0

    printed = json.loads(capsys.readouterr().out)
    assert printed == summary


def test_draw_cli_reports_policy_failure(tmp_path: Path, capsys) -> None:
    policy = tmp_path / "policy.yaml"
    policy.write_text(
        yaml.safe_dump({"poisson_sampler": {"invalid_mean": "raise"}}),
        encoding="utf-8",
    )
    exit_code = run_draw_cli(
        ["--mu", "-2", "--n", "5", "--seed", "1", "--policy", str(policy)]
    )
    assert exit_code == 1
    assert "E_POISSON_MEAN_INVALID" in capsys.readouterr().err


def test_draw_cli_without_validation_keeps_nan_draws(capsys) -> None:
    exit_code = run_draw_cli(["--mu", "nan", "--n", "3", "--seed", "1", "--no-validate"])
    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["nan_count"] == 3
    assert "validation" not in summary
