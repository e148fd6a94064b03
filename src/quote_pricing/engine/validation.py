"""
Consistency Validator and hotel pricing advisory checks.

Nothing here blocks or changes a calculation; results are informational.
"""
import logging

from .aggregator import quote_total
from .models import ConsistencyResult, HotelPricingReport, ItemType, PricingIssue, Quote
from .normalizer import normalize_items

logger = logging.getLogger(__name__)

HOTEL_COST_HIGH = 1000.0
HOTEL_COST_LOW = 10.0


def validate_consistency(quote: Quote, observed_total: float, tolerance: float = 0.01) -> ConsistencyResult:
    """Compare a displayed total against a fresh recomputation."""
    expected = quote_total(quote)
    difference = abs(observed_total - expected)
    is_valid = difference <= tolerance

    if is_valid:
        message = "Pricing is consistent"
    else:
        message = f"Pricing inconsistency detected: {difference:.2f} difference"

    return ConsistencyResult(
        is_valid=is_valid,
        difference=difference,
        expected_total=expected,
        message=message,
    )


def validate_hotel_pricing(
    quote: Quote,
    high: float = HOTEL_COST_HIGH,
    low: float = HOTEL_COST_LOW,
) -> HotelPricingReport:
    """
    Flag hotel items whose cost looks implausible.

    Every finding has severity "warning". The "error" severity is part of the
    report contract but nothing emits it yet, so ``is_valid`` stays True.
    Repeated references to a multi-day stay are reported once.
    """
    issues = []
    for normalized in normalize_items(quote.items):
        item = normalized.item
        if item.item_type != ItemType.HOTEL.value:
            continue

        if item.cost > high:
            issues.append(PricingIssue(
                item_id=item.id,
                issue=f"Hotel cost ${item.cost:g} seems high - verify if this is per-night or total",
                severity="warning",
                original_cost=item.cost,
            ))
        if item.cost < low:
            issues.append(PricingIssue(
                item_id=item.id,
                issue=f"Hotel cost ${item.cost:g} seems low - verify pricing",
                severity="warning",
                original_cost=item.cost,
            ))

    for issue in issues:
        logger.warning("Quote %s item %s: %s", quote.id, issue.item_id, issue.issue)

    return HotelPricingReport(
        is_valid=not any(i.severity == "error" for i in issues),
        issues=issues,
    )
