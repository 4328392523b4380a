"""
Row extractors for capture documents.

Extractors flatten raw capture entries into typed report rows.
"""

from .base import BaseRowExtractor
from .har import NetworkRowExtractor
from .lighthouse import AuditMetricExtractor

__all__ = ["BaseRowExtractor", "NetworkRowExtractor", "AuditMetricExtractor"]
