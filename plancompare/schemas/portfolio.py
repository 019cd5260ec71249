# plancompare/schemas/portfolio.py
"""
Pydantic schemas for the saved portfolio file.

The file is a JSON array of investments in the camelCase layout used by
the web front end's export, with NAV histories embedded in provider
format so a saved portfolio can be replayed offline:

    [
      {
        "id": "3f0c...",
        "schemeCode": "119551",
        "name": "Example Fund - Direct Plan - Growth",
        "isDirect": true,
        "source": "API",
        "type": "SIP",
        "amount": 5000,
        "startDate": "2023-01-15",
        "endDate": null,
        "tags": ["retirement"],
        "navHistory": [{"date": "31-12-2024", "nav": "123.45"}, ...],
        "counterpartSchemeCode": "119552",
        "counterpartName": "Example Fund - Regular Plan - Growth",
        "counterpartNavHistory": [...]
      }
    ]

Unknown keys (e.g. UI loading flags) are ignored.
"""

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from plancompare.schemas.validators import (
    validate_api_date_string,
    validate_date_range,
    validate_iso_date,
    validate_scheme_code,
)


class NAVRowSchema(BaseModel):
    """One embedded NAV row ("DD-MM-YYYY", decimal string)."""

    date: str
    nav: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return validate_api_date_string(v)

    @field_validator("nav", mode="before")
    @classmethod
    def stringify_nav(cls, v: str | int | float) -> str:
        return str(v).strip()


class InvestmentSchema(BaseModel):
    """
    One saved investment.

    Financial fields use Decimal for precision in Python and are written
    as JSON numbers, which is what the front end sums.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Front-end row id")
    scheme_code: str = Field(..., alias="schemeCode")
    name: str = Field(..., min_length=1)
    category: str | None = None
    fund_house: str | None = Field(default=None, alias="fundHouse")
    source: Literal["API", "CUSTOM"] = "API"

    is_direct: bool = Field(..., alias="isDirect")
    nav_history: list[NAVRowSchema] = Field(default_factory=list, alias="navHistory")

    counterpart_scheme_code: str | None = Field(default=None, alias="counterpartSchemeCode")
    counterpart_name: str | None = Field(default=None, alias="counterpartName")
    counterpart_nav_history: list[NAVRowSchema] | None = Field(
        default=None, alias="counterpartNavHistory"
    )

    contribution_type: Literal["SIP", "LUMPSUM"] = Field(..., alias="type")
    amount: Decimal = Field(..., gt=0)
    start_date: dt.date = Field(..., alias="startDate")
    end_date: dt.date | None = Field(default=None, alias="endDate")

    tags: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: str | int | None) -> str | None:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("scheme_code", mode="before")
    @classmethod
    def normalize_scheme_code(cls, v: str | int) -> str:
        return validate_scheme_code(v)

    @field_validator("counterpart_scheme_code", mode="before")
    @classmethod
    def normalize_counterpart_code(cls, v: str | int | None) -> str | None:
        if v is None or v == "":
            return None
        return validate_scheme_code(v)

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start_date(cls, v: str | dt.date) -> dt.date:
        """Strict YYYY-MM-DD; no timestamps, no time zones."""
        return validate_iso_date(v)

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_end_date(cls, v: str | dt.date | None) -> dt.date | None:
        if v is None or v == "":
            return None
        return validate_iso_date(v)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: list[str] | None) -> list[str]:
        """Legacy exports have no tags key or a null."""
        return v or []

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, v: Decimal) -> int | float:
        return int(v) if v == v.to_integral_value() else float(v)

    @model_validator(mode="after")
    def check_date_range(self) -> "InvestmentSchema":
        validate_date_range(self.start_date, self.end_date)
        return self
