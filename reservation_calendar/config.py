import logging
import os

logger = logging.getLogger(__name__)

# --- File Paths ---
DATA_DIR = os.environ.get("DATA_DIR", "public/data")
REPORT_FILE = os.path.join(DATA_DIR, "calendar.json")
RESERVATIONS_FILE = os.environ.get("RESERVATIONS_FILE", "reservations.json")

# --- Reservation store ---
# Kept deliberately simple: just constants and direct env lookups.
RESERVATIONS_URL = os.environ.get("RESERVATIONS_URL")
REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "10"))
INCLUDE_CANCELLED = os.environ.get("INCLUDE_CANCELLED", "false").lower() in {"1", "true", "yes"}

if not RESERVATIONS_URL:
    logger.warning(f"RESERVATIONS_URL not set. Reading reservations from {RESERVATIONS_FILE}.")
