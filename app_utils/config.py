import logging
import os

APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get("ECOTRACK_DATA_DIR", os.path.join(APP_DIR, "data"))
DB_PATH = os.path.join(DATA_DIR, "ecotrack.db")
DB_URL = os.environ.get("ECOTRACK_DB_URL", f"sqlite:///{DB_PATH}")

LOG_LEVEL = os.environ.get("ECOTRACK_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# storage slot for the quiz answers
SNAPSHOT_KEY = "surveyResults"


def setup_logging(level=None):
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
