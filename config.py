"""Environment configuration for the Address Verifier service."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Empty key => every verification uses manual parsing, with no network calls.
GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY", "").strip()

# Seconds before an outbound provider request is abandoned
PLACES_REQUEST_TIMEOUT = float(os.getenv("PLACES_REQUEST_TIMEOUT", "5.0"))

# Seconds between consecutive outbound provider requests
PLACES_MIN_REQUEST_INTERVAL = float(os.getenv("PLACES_MIN_REQUEST_INTERVAL", "0.1"))

LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).resolve().parent / "logs")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

PORT = int(os.getenv("PORT", "8000"))
