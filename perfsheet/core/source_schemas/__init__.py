"""
Source schema models for capture documents.

These Pydantic models represent the raw structures of HAR network logs and
Lighthouse audit reports before normalization into report models.
"""

from .capture import AuditCapture, CaptureDocument, NetworkCapture
from .har import (
    HarContent,
    HarDocument,
    HarEntry,
    HarLog,
    HarPage,
    HarPageTimings,
    HarRequest,
    HarResponse,
    HarTimings,
)
from .lighthouse import (
    AuditDetails,
    LighthouseAudit,
    LighthouseCategory,
    LighthouseEnvironment,
    LighthouseReport,
)

__all__ = [
    # Capture union
    "AuditCapture",
    "CaptureDocument",
    "NetworkCapture",
    # HAR models
    "HarContent",
    "HarDocument",
    "HarEntry",
    "HarLog",
    "HarPage",
    "HarPageTimings",
    "HarRequest",
    "HarResponse",
    "HarTimings",
    # Lighthouse models
    "AuditDetails",
    "LighthouseAudit",
    "LighthouseCategory",
    "LighthouseEnvironment",
    "LighthouseReport",
]
