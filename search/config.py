"""
Runtime configuration.

Values come from the environment (a local .env file is loaded first) and
fall back to the defaults below.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent

# Remote course-tree service
API_BASE_URL    = os.getenv(
    "COURSE_TREE_API_URL", "https://coursetreesearch-service-sandbox.dev.tophat.com"
).rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("COURSE_TREE_TIMEOUT", "10"))

# Local API (app/app.py) and the Streamlit frontend that talks to it
API_HOST    = os.getenv("API_HOST", "0.0.0.0")
API_PORT    = int(os.getenv("API_PORT", "8000"))
BACKEND_URL = os.getenv("BACKEND_URL", f"http://localhost:{API_PORT}").rstrip("/")

# Logging
LOG_DIR   = Path(os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")))
LOG_FILE  = LOG_DIR / "app.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
