"""
Tagged union over the supported capture documents.

The capture kind is decided once when a document is parsed; the assembler
branches on the ``kind`` discriminant instead of probing fields.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from perfsheet.core.models import CaptureKind
from perfsheet.core.source_schemas.har import HarDocument
from perfsheet.core.source_schemas.lighthouse import LighthouseReport


class NetworkCapture(BaseModel):
    """A parsed HAR network log."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CaptureKind.NETWORK] = CaptureKind.NETWORK
    source: str
    document: HarDocument


class AuditCapture(BaseModel):
    """A parsed Lighthouse audit report."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CaptureKind.AUDIT] = CaptureKind.AUDIT
    source: str
    document: LighthouseReport


CaptureDocument = Annotated[Union[NetworkCapture, AuditCapture], Field(discriminator="kind")]
