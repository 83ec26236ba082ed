"""Validation helpers."""

from .errors import ValidationError, ValidationIssue, ValidationReport
from .domain_validator import validate_domain_inputs
from .request import validate_generation_request

__all__ = [
    "ValidationError",
    "ValidationIssue",
    "ValidationReport",
    "validate_domain_inputs",
    "validate_generation_request",
]
