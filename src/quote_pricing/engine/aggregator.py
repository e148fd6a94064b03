"""
Quote Aggregator - sums priced items into the quote total.
"""
import logging
from typing import Optional

from .models import PricingOptions, Quote, QuoteTotal
from .normalizer import normalize_items
from .pricer import price_item
from .strategy import strategy_for

logger = logging.getLogger(__name__)


def discount_amount(subtotal: float, quote: Quote, options: PricingOptions) -> float:
    """Amount taken off ``subtotal`` by the quote discount (0 when excluded)."""
    if not options.include_discount or not quote.discount_percent:
        return 0.0
    return subtotal * (quote.discount_percent / 100.0)


def subtotal(quote: Quote, options: Optional[PricingOptions] = None) -> float:
    """Sum of item prices after markup, before discount."""
    options = options or PricingOptions()
    strategy = strategy_for(quote, options)
    return sum(
        price_item(n.item, quote, strategy, options.include_quantity)
        for n in normalize_items(quote.items)
    )


def calculate_total(quote: Quote, options: Optional[PricingOptions] = None) -> QuoteTotal:
    """
    Total sell price of a quote.

    Multi-day items are deduplicated, each item is priced under the resolved
    strategy, and the discount is applied after markup.

    A quote without items returns its global markup percent flagged as a
    placeholder instead of a summed amount.
    """
    options = options or PricingOptions()

    if not quote.items:
        logger.debug("Quote %s has no items; returning placeholder total", quote.id)
        return QuoteTotal(amount=quote.global_markup_percent, is_placeholder_total=True)

    amount = subtotal(quote, options)
    amount -= discount_amount(amount, quote, options)
    return QuoteTotal(amount=amount)


def quote_total(quote: Quote, options: Optional[PricingOptions] = None) -> float:
    """Numeric form of :func:`calculate_total` for existing call sites."""
    return calculate_total(quote, options).amount
