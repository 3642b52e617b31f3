"""
Unit tests for tracker summaries, metrics and chart export.
"""
import unittest

from app_utils.metrics import percent, round_half_up, trees_planted
from app_utils.plots import completion_bar_plot, figure_png
from features.insights import days_frame, tracker_summary
from features.tracker import Day, Task


def make_day(number, done_flags, confirmed=True):
    tasks = tuple(Task(id=f"{number}-{i}", description="x", done=f) for i, f in enumerate(done_flags))
    return Day(number=number, tasks=tasks, confirmed=confirmed)


class TestMetrics(unittest.TestCase):

    def test_round_half_up(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(12.49), 12)

    def test_percent_zero_denominator(self):
        self.assertEqual(percent(3, 0), 0)

    def test_trees(self):
        self.assertEqual(trees_planted(0), 0)
        self.assertEqual(trees_planted(19), 1)
        self.assertEqual(trees_planted(100), 10)


class TestTrackerSummary(unittest.TestCase):

    def test_no_days(self):
        self.assertIsNone(tracker_summary([]))

    def test_frame_columns(self):
        df = days_frame([make_day(1, [True, False]), make_day(2, [False], confirmed=False)])
        self.assertEqual(list(df.columns), ["day", "confirmed", "tasks", "done", "completion", "successful"])
        self.assertEqual(df.loc[0, "completion"], 50)
        self.assertTrue(df.loc[0, "successful"])
        self.assertFalse(df.loc[1, "successful"])

    def test_summary(self):
        days = [make_day(1, [True, True]), make_day(2, [False, False]), make_day(3, [True, False])]
        out = tracker_summary(days)
        self.assertEqual(out["progress"], 50)
        self.assertEqual(out["streak"], 1)
        self.assertEqual(out["confirmed_days"], 3)
        self.assertEqual(out["best_day"], 1)
        self.assertEqual(out["trees"], 5)

    def test_summary_without_confirmed_days(self):
        out = tracker_summary([make_day(1, [False], confirmed=False)])
        self.assertEqual(out["progress"], 0)
        self.assertIsNone(out["best_day"])


class TestPlots(unittest.TestCase):

    def test_export_png(self):
        df = days_frame([make_day(1, [True, False]), make_day(2, [True])])
        png = figure_png(completion_bar_plot(df))
        self.assertTrue(png.startswith(b"\x89PNG"))

    def test_empty_frame(self):
        png = figure_png(completion_bar_plot(days_frame([])))
        self.assertTrue(png.startswith(b"\x89PNG"))


if __name__ == '__main__':
    unittest.main()
