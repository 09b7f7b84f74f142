"""Command-line interface for strip generation."""

import argparse
import logging
import time
from pathlib import Path

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog console output."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate fractal terrain strips by midpoint displacement"
    )
    parser.add_argument("--config", type=str, default=None, help="Path to TOML config file")
    parser.add_argument("--levels", type=int, default=None, help="Top level (default: 8)")
    parser.add_argument(
        "--length", type=float, default=None, help="Top-level update length (default: 1.0)"
    )
    parser.add_argument(
        "--start", type=float, default=None, help="Initial height (default: 0.0)"
    )
    parser.add_argument("--mean", type=float, default=None, help="Mean height (default: 0.0)")
    parser.add_argument(
        "--fractal-dim",
        type=float,
        default=None,
        help="Fractal dimension exponent (default: 0.65)",
    )
    parser.add_argument(
        "--smooth",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable crease smoothing (default: on)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--strips", type=int, default=256, help="Number of strips to generate (default: 256)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for strip generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    # Import here to avoid slow startup for --help
    from .chain import FoldChain
    from .config import CrinkleConfig, load_config, validate_config
    from .heightfield import HeightfieldStats, heightfield

    base = load_config(Path(args.config)) if args.config else CrinkleConfig()
    overrides = {
        "levels": args.levels,
        "length": args.length,
        "start": args.start,
        "mean": args.mean,
        "fractal_dim": args.fractal_dim,
        "smoothing": args.smooth,
        "seed": args.seed,
    }
    params = base.model_dump()
    params.update({k: v for k, v in overrides.items() if v is not None})
    config = validate_config(**params)

    print(f"Generating {args.strips} strips at level {config.levels}")

    start_time = time.time()
    with FoldChain.from_config(config) as chain:
        field = heightfield(chain, args.strips)
    gen_time = time.time() - start_time

    print(f"Generation complete in {gen_time:.2f}s")
    if field.size == 0:
        return

    stats = HeightfieldStats.from_array(field)
    print(f"Shape: {stats.rows}x{stats.columns}")
    print(f"Min: {stats.minimum:.4f}  Max: {stats.maximum:.4f}")
    print(f"Mean: {stats.mean:.4f}  Std: {stats.std:.4f}")


if __name__ == "__main__":
    main()
