"""
Strategy Resolver - decides which markup applies to the items of a quote.
"""
import logging
from typing import Optional

from .models import (
    EffectiveMarkup,
    LineItem,
    MarkupStrategy,
    MarkupType,
    PricingOptions,
    Quote,
)

logger = logging.getLogger(__name__)


def resolve_strategy(quote: Quote) -> MarkupStrategy:
    """
    Resolve the markup strategy for a quote.

    Resolution order:
    1. Explicit ``markup_strategy`` on the quote, unchanged
    2. No items: GLOBAL
    3. Any item with a nonzero markup: INDIVIDUAL
    4. Fallback: GLOBAL

    MIXED is never inferred; only an explicit declaration selects it.
    """
    if quote.markup_strategy is not None:
        return quote.markup_strategy

    if not quote.items:
        return MarkupStrategy.GLOBAL

    if any(item.markup_value != 0 for item in quote.items):
        logger.debug("Quote %s: item markups found, using individual strategy", quote.id)
        return MarkupStrategy.INDIVIDUAL

    logger.debug("Quote %s: no item markups, using global strategy", quote.id)
    return MarkupStrategy.GLOBAL


def strategy_for(quote: Quote, options: Optional[PricingOptions] = None) -> MarkupStrategy:
    """Strategy for one call: the options override, else the quote's own."""
    if options is not None and options.markup_strategy is not None:
        return options.markup_strategy
    return resolve_strategy(quote)


def effective_markup(item: LineItem, quote: Quote, strategy: MarkupStrategy) -> EffectiveMarkup:
    """Markup value and type that apply to ``item`` under ``strategy``."""
    global_markup = EffectiveMarkup(quote.global_markup_percent, MarkupType.PERCENTAGE, "quote")

    if strategy == MarkupStrategy.GLOBAL:
        return global_markup

    if strategy == MarkupStrategy.INDIVIDUAL:
        return EffectiveMarkup(item.markup_value, item.markup_type)

    # MIXED: the item's own markup where set, global as fallback
    if item.markup_value != 0:
        return EffectiveMarkup(item.markup_value, item.markup_type)
    return global_markup
