import logging

from tour_ga.evolutionary import EvolutionConfig, GeneticSearch


def main():
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(message)s", datefmt="%H:%M:%S")
    cities = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.5, 0.5)]
    cfg = EvolutionConfig(
        population_size=20,
        mutation_rate=0.05,
        max_epochs=50,
        random_seed=42,
        elitism=True,
    )
    search = GeneticSearch(cfg, cities)
    result = search.run()
    for rec in result.history[::10]:
        print(f"gen {rec.epoch}: best={rec.best_distance:.4f} avg={rec.average_distance:.4f}")
    print(f"best tour={result.tour} length={result.length:.4f} ({result.stop_reason})")


if __name__ == "__main__":
    main()
