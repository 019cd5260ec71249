# plancompare/services/portfolio_io.py
"""
Portfolio file import/export.

Reads and writes the JSON portfolio format (see plancompare.schemas.portfolio)
and converts between its rows and InvestmentRecord.

NAV histories travel inside the file, so a loaded portfolio can be
compared without contacting the provider.

Usage:
    from plancompare.services.portfolio_io import load_portfolio, dump_portfolio

    records = load_portfolio("portfolio.json")
    dump_portfolio(records, "backup.json")
"""

import logging
import uuid
from os import PathLike
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from plancompare.schemas.portfolio import InvestmentSchema, NAVRowSchema
from plancompare.services.exceptions import PortfolioFileError, ValidationError
from plancompare.services.navseries import NAVSeries
from plancompare.services.simulation.types import ContributionType, InvestmentRecord

logger = logging.getLogger(__name__)

_PORTFOLIO_ADAPTER = TypeAdapter(list[InvestmentSchema])


# =============================================================================
# CONVERSION
# =============================================================================

def _series_from_rows(rows: list[NAVRowSchema] | None) -> NAVSeries | None:
    if rows is None:
        return None
    return NAVSeries.from_api(row.model_dump() for row in rows)


def schema_to_record(item: InvestmentSchema) -> InvestmentRecord:
    """
    Convert a validated file row into an InvestmentRecord.

    Rows without an id (hand-written files) are given one.

    Raises:
        InvalidNAVError: If an embedded NAV is not a positive decimal
    """
    return InvestmentRecord(
        identifier=item.scheme_code,
        name=item.name,
        primary_is_direct=item.is_direct,
        primary_series=_series_from_rows(item.nav_history) or NAVSeries(),
        contribution_type=ContributionType(item.contribution_type),
        amount=item.amount,
        start_date=item.start_date,
        end_date=item.end_date,
        counterpart_series=_series_from_rows(item.counterpart_nav_history),
        counterpart_identifier=item.counterpart_scheme_code,
        counterpart_name=item.counterpart_name,
        category=item.category,
        fund_house=item.fund_house,
        source=item.source.lower(),
        tags=tuple(item.tags),
        record_id=item.id or str(uuid.uuid4()),
    )


def record_to_schema(record: InvestmentRecord) -> InvestmentSchema:
    """
    Convert an InvestmentRecord into a file row.

    Records that never came from a file get a fresh row id; the front end
    refuses to import rows without one.
    """
    counterpart_rows = (
        record.counterpart_series.to_api_rows()
        if record.counterpart_series is not None else None
    )
    return InvestmentSchema(
        id=record.record_id or str(uuid.uuid4()),
        scheme_code=record.identifier,
        name=record.name,
        category=record.category,
        fund_house=record.fund_house,
        source=record.source.upper(),
        is_direct=record.primary_is_direct,
        nav_history=record.primary_series.to_api_rows(),
        counterpart_scheme_code=record.counterpart_identifier,
        counterpart_name=record.counterpart_name,
        counterpart_nav_history=counterpart_rows,
        contribution_type=record.contribution_type.value,
        amount=record.amount,
        start_date=record.start_date,
        end_date=record.end_date,
        tags=list(record.tags),
    )


# =============================================================================
# FILE I/O
# =============================================================================

def load_portfolio(path: str | PathLike[str]) -> list[InvestmentRecord]:
    """
    Load investments from a portfolio file.

    Raises:
        PortfolioFileError: File unreadable, not JSON, or rows invalid
    """
    file_path = Path(path)

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise PortfolioFileError(str(file_path), f"cannot read file: {e}") from e

    try:
        items = _PORTFOLIO_ADAPTER.validate_json(content)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise PortfolioFileError(
            str(file_path),
            f"{e.error_count()} invalid field(s), first at {location}: {first['msg']}",
        ) from e

    try:
        records = [schema_to_record(item) for item in items]
    except ValidationError as e:
        raise PortfolioFileError(str(file_path), e.message) from e

    logger.info(f"Loaded {len(records)} investments from {file_path}")
    return records


def dump_portfolio(records: list[InvestmentRecord], path: str | PathLike[str]) -> None:
    """
    Write investments to a portfolio file (UTF-8 JSON, camelCase keys).

    Raises:
        PortfolioFileError: File cannot be written
    """
    file_path = Path(path)
    items = [record_to_schema(record) for record in records]
    content = _PORTFOLIO_ADAPTER.dump_json(items, by_alias=True, exclude_none=True, indent=2)

    try:
        file_path.write_bytes(content)
    except OSError as e:
        raise PortfolioFileError(str(file_path), f"cannot write file: {e}") from e

    logger.info(f"Saved {len(records)} investments to {file_path}")
