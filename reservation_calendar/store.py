import json
import logging
import os
from typing import Any, List

import requests
from pydantic import ValidationError

from reservation_calendar import config
from reservation_calendar.day import parse_day
from reservation_calendar.errors import InvalidDateError
from reservation_calendar.models import Reservation

logger = logging.getLogger(__name__)


def _parse_reservation_record(record: Any) -> Reservation | None:
    """Validates a single store record. Returns None for records that cannot be laid out."""
    try:
        reservation = Reservation.model_validate(record)
    except ValidationError as e:
        logger.warning(f"Skipping invalid reservation record {record!r}: {e.error_count()} error(s)")
        return None

    try:
        parse_day(reservation.check_in)
        parse_day(reservation.check_out)
    except InvalidDateError as e:
        logger.warning(f"Skipping reservation {reservation.id}: {e}")
        return None

    return reservation


def parse_reservations(data: Any) -> List[Reservation]:
    """Parses the store payload, either a bare list or {"reservations": [...]}."""
    if isinstance(data, dict):
        data = data.get("reservations", [])
    if not isinstance(data, list):
        logger.error("Unexpected JSON format. Expected a list of reservations.")
        return []

    reservations = []
    for record in data:
        reservation = _parse_reservation_record(record)
        if reservation:
            reservations.append(reservation)

    logger.debug(f"Parsed {len(reservations)} of {len(data)} reservation records")
    return reservations


def load_reservations_from_file(path: str) -> List[Reservation]:
    """Loads reservations from a JSON file."""
    if not os.path.exists(path):
        logger.warning(f"No reservations file found at {path}.")
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (ValueError, IOError) as e:
        logger.error(f"Failed to read reservations from {path}: {e}")
        return []
    return parse_reservations(data)


def fetch_reservations(url: str) -> List[Reservation]:
    """Fetches reservations as JSON from the reservation store."""
    logger.info(f"Fetching reservations from {url}")
    try:
        response = requests.get(url, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error(f"Failed to fetch reservations: {e}")
        return []
    return parse_reservations(data)


def load_reservations() -> List[Reservation]:
    """Loads reservations from the configured URL, falling back to the local file."""
    if config.RESERVATIONS_URL:
        return fetch_reservations(config.RESERVATIONS_URL)
    return load_reservations_from_file(config.RESERVATIONS_FILE)
