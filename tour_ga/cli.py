import argparse
import logging
import sys
from pathlib import Path

import torch

from tour_ga.data import load_instance, parse_cities
from tour_ga.errors import GAError
from tour_ga.evolutionary import EvolutionConfig, GeneticSearch
from tour_ga.reporting import RunReporter
from tour_ga.tsp.genome import CROSSOVERS


logger = logging.getLogger("tour_ga.cli")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def build_config(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population_size,
        mutation_rate=args.mutation_rate,
        max_epochs=args.max_epochs,
        stagnation_limit=args.stagnation_limit,
        target_distance=args.target_distance,
        random_seed=args.seed,
        elitism=args.elitism,
        crossover=args.crossover,
    )


def run(args) -> None:
    if args.tsplib:
        instance = load_instance(Path(args.tsplib))
        name, cities, optimum = instance.name, instance.cities, instance.optimum
    else:
        name, cities, optimum = "inline", parse_cities(args.cities), None
    device = torch.device(args.device) if args.device else None
    logger.info("solving %s (%d cities)", name, len(cities))
    search = GeneticSearch(build_config(args), cities, device=device, optimum=optimum)
    try:
        result = search.run()
    except KeyboardInterrupt:
        # Report the best tour of the epochs that completed.
        logger.info("interrupted at epoch %d", search.epoch)
        result = search.result()
    if args.history_out:
        search.reporter.save(Path(args.history_out))
        logger.info("history written to %s", args.history_out)
    print(f"epochs={result.epochs} stop={result.stop_reason or 'interrupted'}")
    print(f"best_length={result.length:.4f}")
    if result.optimum is not None:
        print(f"optimum={result.optimum:.4f} gap={result.gap:.2%}")
    print("tour=" + " ".join(str(c) for c in result.tour))


def history(args) -> None:
    reporter = RunReporter.load(Path(args.path))
    for rec in reporter.history():
        print(f"epoch {rec.epoch:5d}: best={rec.best_distance:10.4f} avg={rec.average_distance:10.4f}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic algorithm TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the GA on a TSPLIB file or inline coordinates")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--tsplib", help="Path to a .tsp file with NODE_COORD_SECTION")
    source.add_argument("--cities", help="Coordinates as 'x,y x,y ...'")
    run_parser.add_argument("--population-size", type=int, default=40)
    run_parser.add_argument("--mutation-rate", type=float, default=0.02)
    run_parser.add_argument("--max-epochs", type=int, default=100)
    run_parser.add_argument("--stagnation-limit", type=int, default=None)
    run_parser.add_argument("--target-distance", type=float, default=None)
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--elitism", action="store_true")
    run_parser.add_argument("--crossover", choices=sorted(CROSSOVERS), default="order")
    run_parser.add_argument("--device", default=None, help="torch device for evaluation, e.g. cuda:0")
    run_parser.add_argument("--history-out", default=None, help="Write the per-epoch history as JSON")
    run_parser.add_argument("-v", "--verbose", action="store_true")
    run_parser.set_defaults(func=run)

    history_parser = subparsers.add_parser("history", help="Print a saved run history")
    history_parser.add_argument("path")
    history_parser.add_argument("-v", "--verbose", action="store_true")
    history_parser.set_defaults(func=history)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except GAError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
