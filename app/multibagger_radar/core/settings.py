import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[3]
APP_DIR = BASE_DIR / "app" / "multibagger_radar"
DATA_DIR = BASE_DIR / "data"
CONFIG_DIR = BASE_DIR / "config"
TEMPLATE_DIR = APP_DIR / "templates"
STATIC_DIR = APP_DIR / "static"

RULES_PATH = Path(os.getenv("RADAR_RULES_PATH", CONFIG_DIR / "rules.yaml"))
SAMPLE_STOCKS_PATH = DATA_DIR / "sample_stocks.csv"
LOG_LEVEL = os.getenv("RADAR_LOG_LEVEL", "INFO").upper()
