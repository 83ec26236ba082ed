"""Input normalization."""

from .config_resolver import DEFAULT_CONFIG, resolve_effective_config
from .request import extract_subjects, extract_unavailable_intervals, normalize_request

__all__ = [
    "DEFAULT_CONFIG",
    "extract_subjects",
    "extract_unavailable_intervals",
    "normalize_request",
    "resolve_effective_config",
]
