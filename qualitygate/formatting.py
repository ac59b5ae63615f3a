"""Turn raw condition values into the text shown next to a failing status."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from shared.models import MetricType

EXPLANATION_FORMAT = " ({actual} is {relation} than {threshold})"
WORK_DURATION_FORMAT = "{days}d {hours}h {minutes}min"
# Technical debt is counted in 8-hour work days.
HOURS_PER_DAY = 8

RATINGS = {"1": "A", "2": "B", "3": "C", "4": "D", "5": "E"}


def rating_to_letter(rating: str) -> str:
    """Convert a rating code to its letter; unknown codes are returned as is."""

    return RATINGS.get(rating, rating)


def work_duration_to_time(work_duration: str) -> str:
    """Render a duration in minutes as days, hours and minutes.

    Each part is truncated toward zero and keeps the sign of the input, so
    ``-490`` renders as ``-1d 0h -10min``.
    """

    minutes = int(work_duration)
    sign = -1 if minutes < 0 else 1
    magnitude = abs(minutes)
    return WORK_DURATION_FORMAT.format(
        days=sign * (magnitude // HOURS_PER_DAY // 60),
        hours=sign * (magnitude // 60 % HOURS_PER_DAY),
        minutes=sign * (magnitude % 60),
    )


def round_percent(value: str) -> str:
    """Round to one decimal place, half up, always keeping the decimal digit."""

    rounded = Decimal(str(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(rounded)


def comparator_to_string(comparator: str) -> str:
    return "greater" if comparator == "GT" else "less"


def explain(actual_value: str, error_threshold: str, comparator: str, metric_type: str) -> str:
    """Build the sentence explaining why a condition failed.

    >>> explain("45.0", "20", "GT", "PERCENT")
    ' (45.0% is greater than 20%)'
    """

    if metric_type == MetricType.RATING:
        actual = rating_to_letter(actual_value)
        relation = "worse"
        threshold = rating_to_letter(error_threshold)
    elif metric_type == MetricType.WORK_DUR:
        actual = work_duration_to_time(actual_value)
        relation = comparator_to_string(comparator)
        threshold = work_duration_to_time(error_threshold)
    elif metric_type == MetricType.PERCENT:
        actual = round_percent(actual_value) + "%"
        relation = comparator_to_string(comparator)
        threshold = error_threshold + "%"
    elif metric_type == MetricType.MILLISEC:
        actual = actual_value + "ms"
        relation = comparator_to_string(comparator)
        threshold = error_threshold + "ms"
    else:
        actual = actual_value
        relation = comparator_to_string(comparator)
        threshold = error_threshold
    return EXPLANATION_FORMAT.format(actual=actual, relation=relation, threshold=threshold)
