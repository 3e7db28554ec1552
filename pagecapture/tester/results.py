"""Comparison outcomes.

Pydantic v2 models describing the result of comparing a captured bitmap
against its reference.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from .bitmap import Bitmap


class ComparisonOutcome(BaseModel):
    """Either a match, or a mismatch carrying the actual bitmap.

    The actual bitmap is kept on mismatches so it can be persisted as an
    artifact.
    """

    model_config = ConfigDict(frozen=True)

    matched: bool = Field(..., description="True when the byte sequences are identical")
    actual: Optional[InstanceOf[Bitmap]] = Field(default=None, description="Actual capture, set on mismatch")
    description: str = Field(default="", description="What was compared, for humans")

    @classmethod
    def match(cls, description: str = "") -> "ComparisonOutcome":
        return cls(matched=True, description=description)

    @classmethod
    def mismatch(cls, actual: Bitmap, description: str) -> "ComparisonOutcome":
        return cls(matched=False, actual=actual, description=description)
