# plancompare/schemas/mfapi.py
"""
Pydantic schemas for the mfapi.in responses.

Endpoints:
    GET /mf/search?q=<query>  -> [{"schemeCode": 119551, "schemeName": "..."}]
    GET /mf/<code>            -> {"meta": {...}, "data": [{"date", "nav"}], "status"}

NAV rows are kept as provider strings here. Conversion to a NAVSeries
(NAVSeries.from_api) parses them strictly and fails loudly on bad data.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from plancompare.schemas.validators import validate_scheme_code


# =============================================================================
# SEARCH
# =============================================================================

class SchemeSearchItem(BaseModel):
    """One search hit."""

    model_config = ConfigDict(populate_by_name=True)

    scheme_code: str = Field(..., alias="schemeCode")
    scheme_name: str = Field(..., alias="schemeName")

    @field_validator("scheme_code", mode="before")
    @classmethod
    def normalize_scheme_code(cls, v: str | int) -> str:
        """Search results send codes as numbers."""
        return validate_scheme_code(v)


# =============================================================================
# SCHEME HISTORY
# =============================================================================

class MFSchemeMeta(BaseModel):
    """Descriptive metadata of a scheme."""

    fund_house: str | None = None
    scheme_type: str | None = None
    scheme_category: str | None = None
    scheme_code: str
    scheme_name: str

    @field_validator("scheme_code", mode="before")
    @classmethod
    def normalize_scheme_code(cls, v: str | int) -> str:
        return validate_scheme_code(v)


class NAVPoint(BaseModel):
    """
    One NAV row in provider format.

    Attributes:
        date: "DD-MM-YYYY"
        nav: Decimal as string, e.g. "123.45670"
    """

    date: str
    nav: str

    @field_validator("nav", mode="before")
    @classmethod
    def stringify_nav(cls, v: str | int | float) -> str:
        return str(v).strip()


class MFSchemeResponse(BaseModel):
    """Full history response; `data` is newest-first as sent."""

    meta: MFSchemeMeta
    data: list[NAVPoint] = Field(default_factory=list)
    status: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.data
