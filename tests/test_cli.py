import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from tour_ga.cli import main
from tour_ga.reporting import RunReporter


SQUARE = "0,0 0,1 1,1 1,0"


class TestCli(unittest.TestCase):

    def _main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_run_inline_and_history(self):
        with tempfile.TemporaryDirectory() as tmp:
            history_path = Path(tmp) / "history.json"
            code, out, _ = self._main(
                ["run", "--cities", SQUARE, "--max-epochs", "5", "--seed", "1",
                 "--elitism", "--history-out", str(history_path)]
            )
            self.assertEqual(code, 0)
            self.assertIn("epochs=5 stop=max_epochs", out)
            self.assertIn("best_length=", out)
            self.assertIn("tour=", out)
            self.assertEqual(len(RunReporter.load(history_path)), 5)

            code, out, _ = self._main(["history", str(history_path)])
            self.assertEqual(code, 0)
            self.assertEqual(len(out.strip().splitlines()), 5)
            self.assertIn("epoch     0:", out)

    def test_run_tsplib_reports_gap(self):
        tsp = "\n".join(
            ["NAME: tri", "TYPE: TSP", "DIMENSION: 3", "EDGE_WEIGHT_TYPE: EUC_2D",
             "NODE_COORD_SECTION", "1 0 0", "2 3 0", "3 0 4", "EOF", ""]
        )
        tour = "\n".join(["NAME: tri.opt.tour", "TYPE: TOUR", "DIMENSION: 3",
                          "TOUR_SECTION", "1", "2", "3", "-1", "EOF", ""])
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "tri.tsp").write_text(tsp)
            (Path(tmp) / "tri.opt.tour").write_text(tour)
            code, out, _ = self._main(
                ["run", "--tsplib", str(Path(tmp) / "tri.tsp"), "--max-epochs", "3", "--crossover", "pmx"]
            )
        self.assertEqual(code, 0)
        self.assertIn("optimum=12.0000", out)
        self.assertIn("gap=0.00%", out)

    def test_bad_configuration_exit_code(self):
        code, _, err = self._main(["run", "--cities", SQUARE, "--population-size", "1"])
        self.assertEqual(code, 2)
        self.assertIn("population_size", err)

    def test_bad_input_exit_code(self):
        code, _, err = self._main(["run", "--cities", "0,0"])
        self.assertEqual(code, 2)
        self.assertIn("at least 2 cities", err)

    def test_missing_tsplib_file_exit_code(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, _, err = self._main(["run", "--tsplib", str(Path(tmp) / "absent.tsp")])
        self.assertEqual(code, 2)
        self.assertIn("absent.tsp", err)

    def test_unreadable_history_exit_code(self):
        with tempfile.TemporaryDirectory() as tmp:
            broken = Path(tmp) / "history.json"
            broken.write_text("{not json")
            code, _, err = self._main(["history", str(broken)])
            self.assertEqual(code, 2)
            self.assertIn("history.json", err)
            code, _, _ = self._main(["history", str(Path(tmp) / "absent.json")])
            self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
