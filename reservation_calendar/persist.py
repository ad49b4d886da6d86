import json
import logging
import os
from datetime import datetime, timezone

from reservation_calendar import config
from reservation_calendar.models import CalendarReport

logger = logging.getLogger(__name__)


def ensure_data_dir():
    """Ensures the data directory exists."""
    if not os.path.exists(config.DATA_DIR):
        os.makedirs(config.DATA_DIR)


def save_report(report: CalendarReport):
    """Saves the calendar layout report to a JSON file with timestamp."""
    ensure_data_dir()
    try:
        data = {
            "last_updated": datetime.now(timezone.utc).isoformat(),
            "report": report.model_dump(mode="json", by_alias=True),
        }
        with open(config.REPORT_FILE, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved report to {config.REPORT_FILE}")
    except IOError as e:
        logger.error(f"Failed to save report: {e}")
