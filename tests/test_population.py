import random
import unittest

from tour_ga.errors import InvariantViolation
from tour_ga.population import Population, initialize, replace
from tour_ga.tsp.base import is_permutation


class TestPopulation(unittest.TestCase):

    def test_initialize_builds_permutations(self):
        pop = initialize(30, 8, random.Random(1))
        self.assertEqual(len(pop), 30)
        self.assertEqual(pop.epoch, 0)
        for chromosome in pop:
            self.assertEqual(sorted(chromosome), list(range(8)))

    def test_initialize_is_reproducible(self):
        a = initialize(10, 12, random.Random(42))
        b = initialize(10, 12, random.Random(42))
        self.assertEqual(a, b)
        self.assertNotEqual(a, initialize(10, 12, random.Random(43)))

    def test_replace_advances_epoch_and_keeps_old(self):
        old = initialize(4, 5, random.Random(0))
        children = [[4, 3, 2, 1, 0]] * 4
        new = replace(old, children)
        self.assertEqual(new.epoch, 1)
        self.assertEqual(new[0], (4, 3, 2, 1, 0))
        self.assertTrue(all(is_permutation(c, 5) for c in old))
        self.assertIsNot(old, new)
        self.assertEqual(old.epoch, 0)

    def test_replace_rejects_size_change(self):
        old = Population(((0, 1), (1, 0)), epoch=3)
        with self.assertRaises(InvariantViolation) as ctx:
            replace(old, [(0, 1)])
        self.assertEqual(ctx.exception.operator, "replace")
        self.assertEqual(ctx.exception.epoch, 3)


if __name__ == "__main__":
    unittest.main()
