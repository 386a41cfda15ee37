import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from springlayout import (
    LoadError,
    SimulationError,
    SimulationState,
    default_worker_count,
    generate_svg_document,
    get_default_options,
    load_graph,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text!r}")
    return value


def _non_negative_float(text: str) -> float:
    value = float(text)
    if not value >= 0.0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {text!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    defaults = get_default_options()
    parser = argparse.ArgumentParser(description="Lay out a weighted graph and render it as SVG")
    parser.add_argument(
        "-n",
        "--nodes-file",
        default="locations.csv",
        help="CSV file with the nodes, columns id,weight (default: locations.csv)",
    )
    parser.add_argument(
        "-r",
        "--relations-file",
        default="rail.csv",
        help="CSV file with the relations, columns id,from,to,weight (default: rail.csv)",
    )
    parser.add_argument(
        "-o",
        "--out",
        default="out.svg",
        help="Path of the generated SVG (default: out.svg)",
    )
    parser.add_argument(
        "-s",
        "--spring",
        type=_non_negative_float,
        default=defaults.spring_scale,
        help=f"Scaling factor of the springs (default: {defaults.spring_scale})",
    )
    parser.add_argument(
        "-c",
        "--coulomb",
        type=float,
        default=defaults.coulomb_scale,
        help=f"Scaling factor of the coulomb force (default: {defaults.coulomb_scale})",
    )
    parser.add_argument(
        "-t",
        "--time",
        type=float,
        default=defaults.time_delta,
        help=f"Time delta of each computation step (default: {defaults.time_delta})",
    )
    parser.add_argument(
        "--steps",
        type=_non_negative_int,
        default=defaults.steps,
        help=f"Number of simulation steps (default: {defaults.steps})",
    )
    parser.add_argument("--width", type=float, default=defaults.width, help="SVG width")
    parser.add_argument("--height", type=float, default=defaults.height, help="SVG height")
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=defaults.workers,
        help="Worker threads (default: available cores minus one)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help=f"Seed of the initial random placement (default: {defaults.seed})",
    )
    parser.add_argument(
        "--labels",
        action="store_true",
        default=defaults.labels,
        help="Draw node ids next to the nodes",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _build_parser().parse_args(argv)

    _configure_logging(args.log_level)

    try:
        nodes, relations = load_graph(Path(args.nodes_file), Path(args.relations_file), seed=args.seed)
    except (OSError, LoadError) as exc:
        logger.error("Failed to load graph: %s", exc)
        raise SystemExit(1) from exc

    workers = args.workers if args.workers is not None else default_worker_count()
    state = SimulationState(
        nodes,
        relations,
        args.spring,
        args.coulomb,
        args.time,
        workers=workers,
    )

    start = time.perf_counter()
    try:
        last_change = state.run_n_steps(args.steps)
    except SimulationError as exc:
        logger.error("Simulation failed in %s phase: %s", exc.phase, exc)
        raise SystemExit(1) from exc
    elapsed = time.perf_counter() - start
    logger.info("Ran %d step(s) in %.3fs", args.steps, elapsed)
    print(f"Elapsed => {elapsed:.3f}s Last Change => {last_change}")

    rendered = generate_svg_document(
        state.nodes, state.relations, args.width, args.height, labels=args.labels
    )
    output_path = Path(args.out)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Writing SVG document to %s", output_path)
    output_path.write_text(rendered, encoding="utf-8")
    print(f"SVG document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
