# hillclimb/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))


LOG_LEVEL = os.getenv("HC_LOG_LEVEL", "INFO").upper()

# Trace export: each cell is left-justified to this width
EXPORT_COLUMN_WIDTH = int(os.getenv("HC_EXPORT_COLUMN_WIDTH", "20"))
EXPORT_FILENAME = os.getenv("HC_EXPORT_FILENAME", "HillClimbTable.txt")

CORS_ORIGINS = [o.strip() for o in os.getenv("HC_CORS_ORIGINS", "*").split(",") if o.strip()]

API_HOST = os.getenv("HC_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("HC_API_PORT", "8000"))


def configure_logging(level: str = None):
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
