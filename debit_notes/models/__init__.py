"""Domain models for the debit note pipeline.

Rows, supplier aggregates, per-file processing results and error records.
"""

from .error_record import ErrorRecord
from .normalized_row import AMOUNT_FIELDS, TEXT_FIELDS, NormalizedRow
from .processing_result import NOT_FOUND, ProcessingResult
from .supplier import AggregationResult, Supplier

__all__ = [
    # Row models
    "NormalizedRow",
    "TEXT_FIELDS",
    "AMOUNT_FIELDS",
    # Aggregate models
    "Supplier",
    "AggregationResult",
    # Results
    "ProcessingResult",
    "NOT_FOUND",
    "ErrorRecord",
]
