"""
Adapters layer - Request validation and bundled sample data.
"""

from .request_schema import (
    EmployeeCollectionShape,
    MatchRequest,
    classify_employees,
    normalize_employees,
)
from .sample_data import load_sample_request

__all__ = [
    "EmployeeCollectionShape",
    "MatchRequest",
    "classify_employees",
    "normalize_employees",
    "load_sample_request",
]
