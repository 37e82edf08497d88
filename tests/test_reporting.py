import os
import tempfile
import unittest
from pathlib import Path

from tour_ga.errors import InvalidInput
from tour_ga.reporting import EpochRecord, RunReporter


class TestRunReporter(unittest.TestCase):

    def test_records_in_epoch_order(self):
        reporter = RunReporter()
        reporter.record(0, 10.0, 12.5)
        reporter.record(1, 9.0, 11.0)
        self.assertEqual(
            reporter.history(), (EpochRecord(0, 10.0, 12.5), EpochRecord(1, 9.0, 11.0))
        )
        self.assertEqual(len(reporter), 2)

    def test_history_is_a_snapshot(self):
        reporter = RunReporter()
        reporter.record(0, 1.0, 1.0)
        snapshot = reporter.history()
        reporter.record(1, 1.0, 1.0)
        self.assertEqual(len(snapshot), 1)

    def test_rejects_out_of_order_epochs(self):
        reporter = RunReporter()
        reporter.record(3, 1.0, 2.0)
        with self.assertRaises(ValueError):
            reporter.record(3, 1.0, 2.0)
        with self.assertRaises(ValueError):
            reporter.record(2, 1.0, 2.0)

    def test_save_and_load(self):
        reporter = RunReporter()
        for epoch in range(5):
            reporter.record(epoch, 10.0 - epoch, 20.0 - epoch)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "runs" / "history.json"
            reporter.save(path)
            self.assertTrue(os.path.exists(path))
            loaded = RunReporter.load(path)
        self.assertEqual(loaded.history(), reporter.history())
        self.assertEqual(reporter.to_dicts()[0], {"epoch": 0, "best_distance": 10.0, "average_distance": 20.0})

    def test_load_rejects_malformed_history(self):
        with tempfile.TemporaryDirectory() as tmp:
            for name, text in [("broken.json", "{not json"), ("fields.json", '[{"epoch": 0}]'),
                               ("order.json", '[{"epoch": 1, "best_distance": 1, "average_distance": 1},'
                                              ' {"epoch": 0, "best_distance": 1, "average_distance": 1}]')]:
                path = Path(tmp) / name
                path.write_text(text)
                with self.assertRaises(InvalidInput, msg=name):
                    RunReporter.load(path)
            with self.assertRaises(InvalidInput):
                RunReporter.load(Path(tmp) / "absent.json")


if __name__ == "__main__":
    unittest.main()
