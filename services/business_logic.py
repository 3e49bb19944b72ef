"""
Business Logic Services for Rental Board.

This module implements the portfolio figures shown above the listing grid
and returned by the stats endpoint:
- number of available properties
- average monthly rent
- average size in square feet

Rounding is half-up to whole numbers so the figures match what a person
would compute by hand (2.5 -> 3), not Python's banker's rounding.
"""

import logging
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES FOR BUSINESS LOGIC
# =============================================================================

@dataclass
class PortfolioStats:
    """Summary figures for the listing collection."""
    count: int
    average_rent: int
    average_area: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def average_rent_display(self) -> str:
        return f"${format_whole_number(self.average_rent)}"

    @property
    def average_area_display(self) -> str:
        return format_whole_number(self.average_area)


# =============================================================================
# NUMBER HELPERS
# =============================================================================

def round_half_up(value) -> int:
    """
    Round to the nearest whole number, halves away from zero.

    Args:
        value: int, float or Decimal

    Returns:
        Rounded integer
    """
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def format_whole_number(value) -> str:
    """Thousands-separated whole number, e.g. 1500 -> '1,500'."""
    return f"{round_half_up(value):,}"


def describe_result_count(count: int) -> str:
    """Result count label: '1 property found', '3 properties found'."""
    noun = 'property' if count == 1 else 'properties'
    return f"{count} {noun} found"


# =============================================================================
# PORTFOLIO STATISTICS
# =============================================================================

def calculate_portfolio_stats(properties: Iterable) -> PortfolioStats:
    """
    Calculate the portfolio summary for a set of listings.

    Listings without an area count as 0 sq ft toward the average size,
    so the average is over all listings, not just those with an area.

    Args:
        properties: iterable of Property records

    Returns:
        PortfolioStats with zeros for an empty collection
    """
    properties = list(properties)
    count = len(properties)

    if count == 0:
        return PortfolioStats(count=0, average_rent=0, average_area=0)

    total_rent = sum(p.rent or 0 for p in properties)
    total_area = sum(p.area or 0 for p in properties)

    stats = PortfolioStats(
        count=count,
        average_rent=round_half_up(Decimal(total_rent) / count),
        average_area=round_half_up(Decimal(total_area) / count),
    )

    logger.debug(
        f"Portfolio stats: {stats.count} properties, "
        f"avg rent {stats.average_rent}, avg area {stats.average_area}"
    )
    return stats
