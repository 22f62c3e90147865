"""Domain models for the order CSV import tool.

This package contains all domain model classes used throughout the application:
parse-stage tables, per-row validation state, the dataset that binds the two,
and the records handed to the order-storage service.
"""

from .config_models import ApiConfig, DatabaseConfig, GeocoderConfig, ImportConfig, StorageConfig
from .dataset import Dataset, OrderRow
from .error_record import ErrorRecord
from .order import OrderRecord
from .table import ParseReport, RawTable
from .validation import RowValidation, ValidationStatus

__all__ = [
    # Configuration models
    "ApiConfig",
    "DatabaseConfig",
    "GeocoderConfig",
    "ImportConfig",
    "StorageConfig",
    # Processing models
    "Dataset",
    "ErrorRecord",
    "OrderRecord",
    "OrderRow",
    "ParseReport",
    "RawTable",
    "RowValidation",
    "ValidationStatus",
]
