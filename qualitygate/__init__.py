"""Quality gate report helpers."""
from .formatting import comparator_to_string, explain, rating_to_letter, work_duration_to_time
from .provider import QualityGateProvider

__all__ = [
    "QualityGateProvider",
    "comparator_to_string",
    "explain",
    "rating_to_letter",
    "work_duration_to_time",
]
