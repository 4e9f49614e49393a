"""Business-rule validators for reservation and table payloads

Each validator is a pure function returning ``None`` when the rule holds
or the ``ValidationError`` describing the violation. Validators are
composed into ordered pipelines and run by ``run_checks``, which stops
at the first failure.
"""

import calendar
import re
from datetime import date, datetime, time
from functools import partial
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from restaurant_api.config import settings
from restaurant_api.errors import ValidationError
from restaurant_api.models.reservation import ReservationStatus

Check = Callable[[], Optional[ValidationError]]

RESERVATION_FIELDS = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}(:\d{2})?")


def first_failure(checks: Iterable[Check]) -> Optional[ValidationError]:
    """Evaluate checks in order and return the first failure"""
    for check in checks:
        failure = check()
        if failure is not None:
            return failure
    return None


def run_checks(*checks: Check) -> None:
    """Run an ordered pipeline of checks, raising the first failure"""
    failure = first_failure(checks)
    if failure is not None:
        raise failure


def _is_positive_whole_number(value: Any) -> bool:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return value >= 1


def validate_data_present(data: Optional[Mapping[str, Any]]) -> Optional[ValidationError]:
    if data is None:
        return ValidationError("Data Missing!")
    return None


def validate_required_fields(
    payload: Mapping[str, Any], required_field_names: Iterable[str]
) -> Optional[ValidationError]:
    """Fail on the first field that is absent, null or an empty string"""
    for field in required_field_names:
        value = payload.get(field)
        if value is None or value == "":
            return ValidationError(f"A '{field}' property is required.")
    return None


def validate_people_count(people: Any) -> Optional[ValidationError]:
    if not _is_positive_whole_number(people):
        return ValidationError("number of people is invalid")
    return None


def parse_reservation_time(reservation_time: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``; raises ValueError when not a real time"""
    time_format = "%H:%M:%S" if reservation_time.count(":") == 2 else "%H:%M"
    return datetime.strptime(reservation_time, time_format).time()


def parse_reservation_slot(reservation_date: str, reservation_time: str) -> Tuple[date, time]:
    """Parse wire-format date and time; raises ValueError when either is not real"""
    day = datetime.strptime(reservation_date, "%Y-%m-%d").date()
    return day, parse_reservation_time(reservation_time)


def validate_reservation_datetime(
    reservation_date: Any,
    reservation_time: Any,
    now: Optional[datetime] = None,
) -> Optional[ValidationError]:
    """Check format, future-ness, closed weekday and business hours, in that order"""
    if not isinstance(reservation_date, str) or not DATE_PATTERN.fullmatch(reservation_date):
        return ValidationError("reservation_date is invalid!")
    if not isinstance(reservation_time, str) or not TIME_PATTERN.fullmatch(reservation_time):
        return ValidationError("reservation_time is invalid!")

    try:
        day = datetime.strptime(reservation_date, "%Y-%m-%d").date()
    except ValueError:
        return ValidationError("reservation_date is invalid!")
    try:
        slot = parse_reservation_time(reservation_time)
    except ValueError:
        return ValidationError("reservation_time is invalid!")

    if now is None:
        now = datetime.now()
    if datetime.combine(day, slot) <= now:
        return ValidationError("Requested reservation must be in the future")

    if day.weekday() == settings.closed_weekday:
        return ValidationError(
            f"Restaurant is closed on {calendar.day_name[settings.closed_weekday]}s"
        )

    hhmm = slot.hour * 100 + slot.minute
    if hhmm < settings.opening_time or hhmm > settings.closing_time:
        return ValidationError("Restaurant is closed during requested reservation time.")

    return None


def validate_initial_status(status: Any) -> Optional[ValidationError]:
    """New reservations start booked (or cancelled), never seated or finished"""
    if status is None:
        return None
    if status in (ReservationStatus.SEATED.value, ReservationStatus.FINISHED.value):
        return ValidationError("status can't be seated or finished")
    if status not in (ReservationStatus.BOOKED.value, ReservationStatus.CANCELLED.value):
        return ValidationError("unknown status.")
    return None


def validate_reservation_payload(
    payload: Mapping[str, Any], now: Optional[datetime] = None
) -> Optional[ValidationError]:
    """Shared create/edit chain: required fields, party size, date and time"""
    return first_failure((
        partial(validate_required_fields, payload, RESERVATION_FIELDS),
        lambda: validate_people_count(payload.get("people")),
        lambda: validate_reservation_datetime(
            payload.get("reservation_date"), payload.get("reservation_time"), now
        ),
    ))


def validate_table_payload(table: Mapping[str, Any]) -> Optional[ValidationError]:
    table_name = table.get("table_name")
    if not isinstance(table_name, str) or len(table_name) < 2:
        return ValidationError("Invalid table_name")
    if not _is_positive_whole_number(table.get("capacity")):
        return ValidationError("Invalid capacity")
    return None
