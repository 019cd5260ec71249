# plancompare/schemas/__init__.py
"""
Pydantic schemas for external data.

This package contains the wire models, organized by source:
- mfapi: Scheme search and NAV history responses from mfapi.in
- portfolio: Saved portfolio file (JSON export/import)
- validators: Reusable validation functions (scheme codes, dates)

Usage:
    from plancompare.schemas import MFSchemeResponse, InvestmentSchema
"""

from plancompare.schemas.mfapi import (
    MFSchemeMeta,
    MFSchemeResponse,
    NAVPoint,
    SchemeSearchItem,
)
from plancompare.schemas.portfolio import InvestmentSchema, NAVRowSchema

__all__ = [
    # Provider
    "SchemeSearchItem",
    "MFSchemeMeta",
    "NAVPoint",
    "MFSchemeResponse",
    # Portfolio file
    "InvestmentSchema",
    "NAVRowSchema",
]
