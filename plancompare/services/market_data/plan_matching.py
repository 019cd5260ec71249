# plancompare/services/market_data/plan_matching.py
"""
Plan pairing heuristics.

Resolves free text to a scheme, and a scheme to its sibling plan (Direct
for a Regular plan, Regular for a Direct plan), using only the provider's
name search.

These prepare input for the engine. Nothing in the simulation or
analytics packages calls them: an InvestmentRecord arrives with its
primary and counterpart series already resolved.

Scheme names follow the AMFI convention "Fund Name - Plan - Option", e.g.
"Example Flexi Cap Fund - Direct Plan - Growth". Regular plans usually
carry no "Direct" marker at all.
"""

import logging
import re

from plancompare.services.constants import MAX_SEARCH_RESULTS
from plancompare.services.market_data.base import SchemeSearchResult
from plancompare.services.protocols import SchemeSearchProtocol

logger = logging.getLogger(__name__)

# Words stripped from a free-text query before retrying the search
_QUERY_NOISE = re.compile(
    r"mid ?cap|large ?cap|small ?cap|flexi ?cap|multi ?cap"
    r"|fund|scheme|plan|option|growth|direct|regular",
    re.IGNORECASE,
)

# Plan/option markers stripped from a scheme name to get its base name
_NAME_NOISE = re.compile(
    r"direct plan|direct|regular plan|regular|growth option|growth plan|growth|option",
    re.IGNORECASE,
)

_MULTISPACE = re.compile(r"\s\s+")


def is_direct_plan(name: str) -> bool:
    """True if a scheme name looks like a Direct plan."""
    return "direct" in name.lower()


def _is_idcw(name: str) -> bool:
    lower = name.lower()
    return "idcw" in lower or "dividend" in lower


def _squash(text: str) -> str:
    return _MULTISPACE.sub(" ", text.replace("-", " ")).strip()


def _search(provider: SchemeSearchProtocol, query: str) -> list[SchemeSearchResult]:
    return provider.search_schemes(query)[:MAX_SEARCH_RESULTS]


# =============================================================================
# FREE TEXT -> SCHEME
# =============================================================================

def find_best_matching_scheme(
        provider: SchemeSearchProtocol,
        raw_query: str,
) -> SchemeSearchResult | None:
    """
    Resolve free text (e.g. a fund name from a statement) to one scheme.

    Search strategy, stopping at the first non-empty result:
        1. The query as typed
        2. The query without category and plan/option words
        3. The first two words longer than two characters

    Preference among results: Direct plan with the Growth option (or the
    IDCW option if the query mentions IDCW/dividend), then any Direct plan,
    then the first result.
    """
    results = _search(provider, raw_query)

    if not results:
        cleaned = _squash(_QUERY_NOISE.sub("", raw_query))
        if len(cleaned) > 2 and cleaned != raw_query.strip():
            results = _search(provider, cleaned)

    if not results:
        words = [w for w in raw_query.split(" ") if len(w) > 2]
        if len(words) >= 2:
            results = _search(provider, " ".join(words[:2]))

    if not results:
        logger.debug(f"No scheme matches '{raw_query}'")
        return None

    wants_idcw = _is_idcw(raw_query)

    for scheme in results:
        lower = scheme.name.lower()
        if not is_direct_plan(lower):
            continue
        if wants_idcw and _is_idcw(lower):
            return scheme
        if not wants_idcw and "growth" in lower:
            return scheme

    for scheme in results:
        if is_direct_plan(scheme.name):
            return scheme
    return results[0]


# =============================================================================
# SCHEME -> SIBLING PLAN
# =============================================================================

def _counterpart_queries(name: str) -> list[str]:
    """Search queries to try, most specific first, without duplicates."""
    parts = name.split(" - ")
    base = parts[0].strip()
    queries: list[str] = []

    if len(parts) > 1 and len(base) > 5:
        queries.append(base)

    cleaned = _squash(_NAME_NOISE.sub("", name))
    if cleaned and cleaned != base:
        queries.append(cleaned)

    # Regular plans rarely carry a suffix, Direct plans always do
    if len(parts) > 1 and not is_direct_plan(name):
        queries.append(f"{base} Direct")

    first_words = " ".join(name.split(" ")[:3])
    if len(first_words) > 4:
        queries.append(first_words)

    return list(dict.fromkeys(queries))


def _is_counterpart(candidate: SchemeSearchResult, code: str, name: str) -> bool:
    if candidate.code == code:
        return False

    candidate_name = candidate.name.lower()
    original = name.lower()

    # Opposite plan type
    if is_direct_plan(original) == is_direct_plan(candidate_name):
        return False

    # Same option
    if "growth" in original and "growth" not in candidate_name:
        return False
    if _is_idcw(original) and not _is_idcw(candidate_name):
        return False

    return True


def find_counterpart_scheme(
        provider: SchemeSearchProtocol,
        code: str,
        name: str,
) -> SchemeSearchResult | None:
    """
    Find the sibling plan of a scheme.

    Args:
        provider: Anything with search_schemes()
        code: Scheme code of the held plan (never returned)
        name: Full scheme name of the held plan

    Returns:
        The first search hit of the opposite plan type with the same option
        (Growth/IDCW), or None
    """
    for query in _counterpart_queries(name):
        for candidate in _search(provider, query):
            if _is_counterpart(candidate, code, name):
                logger.debug(f"Counterpart of {code}: {candidate.code} via '{query}'")
                return candidate

    logger.info(f"No counterpart plan found for {code} ({name})")
    return None
