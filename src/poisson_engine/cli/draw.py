"""CLI wrapper for drawing Poisson deviates over a seeded Philox substream."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from poisson_engine.core.config import SamplerPolicy, load_sampler_policy
from poisson_engine.core.errors import PoissonEngineError
from poisson_engine.core.logging import add_file_handler, configure_logging, parse_level
from poisson_engine.sampler import DrawRequest, PoissonDrawRunner, validate_draws

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Draw Poisson deviates with the Ahrens-Dieter generator.",
    )
    parser.add_argument("--mu", required=True, type=float, help="Poisson mean (finite, >= 0).")
    parser.add_argument("--n", required=True, type=int, help="Number of deviates to draw.")
    parser.add_argument("--seed", required=True, type=int, help="Philox seed in [0, 2^64).")
    parser.add_argument("--label", default="poisson_draws", help="Substream label for the run.")
    parser.add_argument("--stream-index", type=int, default=0, help="Substream index under the label.")
    parser.add_argument("--policy", type=Path, help="Optional sampler policy YAML.")
    parser.add_argument("--output-dir", type=Path, help="Directory for draws.parquet and summary.json.")
    parser.add_argument("--result-json", dest="result_json", type=Path, help="Optional JSON file to persist the run summary.")
    parser.add_argument("--no-validate", dest="validate", action="store_false", help="Skip the moment check of the drawn sample.")
    parser.add_argument("--log-level", default="info", help="Logging level (default: info).")
    parser.add_argument("--log-file", type=Path, help="Optional file that also receives log records.")

    args = parser.parse_args(argv)
    try:
        level = parse_level(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(level=level)
    if args.log_file:
        add_file_handler(args.log_file.expanduser(), level=level)

    if args.n < 0:
        parser.error("--n must be non-negative")

    try:
        policy = load_sampler_policy(args.policy) if args.policy else SamplerPolicy()
        result = PoissonDrawRunner(policy).run(
            DrawRequest(
                seed=args.seed,
                mu=args.mu,
                n=args.n,
                label=args.label,
                stream_index=args.stream_index,
            ),
            output_dir=args.output_dir,
        )
        summary = result.summary()
        if args.validate and args.n >= 2 and args.mu > 0.0:
            summary["validation"] = validate_draws(result.draws, args.mu)
    except PoissonEngineError as exc:
        logger.error("poisson draw failed: %s", exc)
        print(f"[poisson-engine] failed: {exc}", file=sys.stderr)
        return 1

    payload = json.dumps(summary, indent=2, sort_keys=True)
    if args.result_json:
        target = args.result_json.expanduser().resolve()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
    print(payload)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
