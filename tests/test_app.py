"""
End-to-end tests for the Streamlit screens, driven with AppTest.
"""
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

_DATA_DIR = tempfile.mkdtemp()
os.environ.setdefault("ECOTRACK_DATA_DIR", _DATA_DIR)
os.environ.setdefault("ECOTRACK_DB_URL", f"sqlite:///{os.path.join(_DATA_DIR, 'ecotrack.db')}")

import streamlit as st
from sqlalchemy import create_engine
from streamlit.testing.v1 import AppTest

import app_utils.storage as storage
from app_utils.storage import SnapshotStore, init_db

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "app.py")


def click(at, label):
    [b for b in at.button if b.label == label][0].click().run()


def button_labels(at):
    return [b.label for b in at.button]


class TestAppFlows(unittest.TestCase):
    """Quiz submission, tracker routing and error notices."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.engine = create_engine(
            f"sqlite:///{os.path.join(self.temp_dir, 'app.db')}",
            connect_args={"check_same_thread": False},
        )
        init_db(self.engine)
        patches = [
            patch.object(storage, "engine", self.engine),
            patch.object(storage, "DATA_DIR", self.temp_dir),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)
        st.cache_resource.clear()
        self.store = SnapshotStore(self.engine)
        self.at = AppTest.from_file(APP_PATH, default_timeout=30)

    def tearDown(self):
        st.cache_resource.clear()
        self.engine.dispose()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def open_page(self, page):
        self.at.run()
        self.at.radio(key="page").set_value(page).run()

    def answer_all(self, option_index):
        self.at.run()
        for i in range(7):
            radio = self.at.radio(key=f"quiz_q_{i}")
            radio.set_value(radio.options[option_index]).run()
            click(self.at, "Next" if i < 6 else "Submit")

    def test_submit_saves_raw_answers(self):
        self.answer_all(3)
        self.assertFalse(self.at.exception)
        self.assertEqual(self.store.load(), [4] * 7)
        self.assertIn("Go to Tracker", button_labels(self.at))

    def test_retake_survey_from_tracker_restarts_quiz(self):
        self.answer_all(0)
        click(self.at, "Go to Tracker")
        self.assertIn("Retake Survey", button_labels(self.at))

        click(self.at, "Retake Survey")
        labels = button_labels(self.at)
        self.assertIn("Next", labels)
        self.assertNotIn("Go to Tracker", labels)
        self.assertEqual(self.at.radio(key="quiz_q_0").value, self.at.radio(key="quiz_q_0").options[0])

    def test_tracker_without_snapshot_routes_to_quiz(self):
        self.open_page("Tracker")
        self.assertEqual(self.at.info[0].value, "Please complete the survey first.")
        self.assertIn("Go to Survey", button_labels(self.at))

        click(self.at, "Go to Survey")
        self.assertEqual(self.at.radio(key="page").value, "Quiz")
        self.assertIn("Next", button_labels(self.at))

    def test_go_to_survey_after_submit_shows_questions(self):
        self.answer_all(1)
        with self.engine.begin() as conn:
            conn.exec_driver_sql("DELETE FROM kv")
        click(self.at, "Go to Tracker")
        click(self.at, "Go to Survey")
        self.assertIn("Next", button_labels(self.at))

    def test_confirm_without_selection_warns(self):
        self.store.save([4, 1, 1, 1, 1, 1, 1])
        self.open_page("Tracker")
        click(self.at, "Submit Challenges")
        self.assertEqual(self.at.warning[0].value, "Please select at least one challenge for today.")
        self.assertIn("Submit Challenges", button_labels(self.at))

    def test_confirmed_day_progress(self):
        self.store.save([4, 1, 1, 1, 1, 1, 1])
        self.open_page("Tracker")
        for key in [c.key for c in self.at.checkbox if c.key and c.key.startswith("sel_")]:
            self.at.checkbox(key=key).check().run()
        click(self.at, "Submit Challenges")
        self.assertNotIn("Submit Challenges", button_labels(self.at))

        done_keys = [c.key for c in self.at.checkbox if c.key and c.key.startswith("done_")]
        self.assertEqual(len(done_keys), 2)
        self.at.checkbox(key=done_keys[0]).check().run()
        self.assertFalse(self.at.exception)
        self.assertIn("**Overall Completion: 50%**", [m.value for m in self.at.markdown])

    def test_footer_shows_configured_database(self):
        from app_utils.config import DB_URL
        self.at.run()
        self.assertIn(f"Local DB: {DB_URL} · Personal tracking tool", [c.value for c in self.at.caption])

    def test_failed_save_shows_error(self):
        with patch.object(SnapshotStore, "save", return_value=False):
            self.answer_all(2)
        self.assertEqual(self.at.error[0].value,
                         "Could not save your answers. The tracker will not see this attempt.")
        self.assertIsNone(self.store.load())



class TestAppSource(unittest.TestCase):
    """Checks on the script and packaging that need no Streamlit runtime."""

    def setUp(self):
        with open(APP_PATH, encoding="utf-8") as f:
            self.source = f.read()

    def test_no_deprecated_container_width(self):
        self.assertNotIn("use_container_width", self.source)

    def test_module_logger(self):
        self.assertIn("logger = logging.getLogger(__name__)", self.source)

    def test_script_not_packaged_as_module(self):
        pyproject = os.path.join(os.path.dirname(APP_PATH), "pyproject.toml")
        with open(pyproject, encoding="utf-8") as f:
            self.assertNotIn("py-modules", f.read())

def tearDownModule():
    shutil.rmtree(_DATA_DIR, ignore_errors=True)


if __name__ == '__main__':
    unittest.main()
