"""
Common utilities package for the ChronoAtlas service.

Logging setup and best-effort JSON extraction from model output.
"""

from chronoatlas.utils.json_parser import (
    JSONExtractionError,
    extract_json_array,
    extract_json_object,
)
from chronoatlas.utils.logger import setup_logger

__all__ = [
    # JSON parsing utilities
    "JSONExtractionError",
    "extract_json_array",
    "extract_json_object",
    # Logging utilities
    "setup_logger",
]
