"""
Quote Pricing Engine - one entry point over the pricing operations.

Bundles settings (tolerance, hotel cost bounds, markup defaults) with the pure functions of
this package and adds a traced ``calculate`` that returns a QuoteResult:
- Structured per-line output with markup trace
- Strategy resolution trace
- Advisory hotel warnings bubbled up to the result
"""
import logging
from typing import Iterable, Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from . import analytics, day_allocator, markup_defaults, pricer, validation
from .aggregator import calculate_total, discount_amount
from .models import (
    ConsistencyResult,
    EffectiveMarkup,
    HotelPricingReport,
    LineItem,
    MarkupType,
    MarkupValidation,
    PricingOptions,
    Quote,
    QuoteResult,
    QuoteTotal,
)
from .normalizer import normalize_items
from .strategy import strategy_for

logger = logging.getLogger(__name__)


class QuotePricingEngine:
    """
    Core pricing engine that turns quote line items into a sell price.

    Resolution order:
    1. Drop repeated references to multi-day items
    2. Resolve the markup strategy (explicit, else inferred from item markups)
    3. Price each item: base cost × quantity plus its effective markup
    4. Sum, then apply the quote discount
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize engine with settings."""
        self.settings = settings or get_settings()

    def calculate(self, quote: Quote, options: Optional[PricingOptions] = None) -> QuoteResult:
        """
        Price a quote with full traceability.

        Args:
            quote: Quote snapshot with its items
            options: Optional pricing switches

        Returns:
            QuoteResult with lines, trace and warnings
        """
        options = options or PricingOptions()
        strategy = strategy_for(quote, options)

        result = QuoteResult(
            quote_id=quote.id,
            strategy=strategy,
            subtotal=0.0,
            discount_amount=0.0,
            total=0.0,
        )

        if options.markup_strategy is not None:
            result.add_trace("Strategy", "Overridden for this calculation", strategy.value)
        elif quote.markup_strategy is not None:
            result.add_trace("Strategy", "Declared on quote", strategy.value)
        else:
            result.add_trace("Strategy", "Inferred from item markups", strategy.value)

        if not quote.items:
            total = calculate_total(quote, options)
            result.total = total.amount
            result.is_placeholder_total = total.is_placeholder_total
            result.add_trace("Placeholder", "No items; reporting global markup percent", f"{total.amount:g}")
            return result

        normalized = normalize_items(quote.items)
        dropped = len(quote.items) - len(normalized)
        if dropped:
            result.add_trace("Multi-Day", f"Skipped {dropped} repeated multi-day reference(s)")

        for entry in normalized:
            line = pricer.price_line(entry.item, quote, strategy, options.include_quantity)
            result.lines.append(line)
            result.subtotal += line.price

        result.add_trace("Subtotal", f"{len(result.lines)} item(s) after markup", f"${result.subtotal:.2f}")

        result.discount_amount = discount_amount(result.subtotal, quote, options)
        result.total = result.subtotal - result.discount_amount
        if result.discount_amount:
            result.add_trace(
                "Discount", f"{quote.discount_percent:g}% off subtotal", f"-${result.discount_amount:.2f}"
            )
        result.add_trace("Total", "Sell price", f"${result.total:.2f}")

        report = self.validate_hotel_pricing(quote)
        for issue in report.issues:
            warning = f"{issue.item_id}: {issue.issue}"
            if warning not in result.warnings:
                result.add_warning(warning)

        return result

    def total(self, quote: Quote, options: Optional[PricingOptions] = None) -> QuoteTotal:
        return calculate_total(quote, options)

    def day_total(
        self,
        quote: Quote,
        day_index: int,
        items: Optional[Iterable[LineItem]] = None,
        options: Optional[PricingOptions] = None,
    ) -> float:
        """Total for one day; defaults to the quote's own items."""
        items = quote.items if items is None else items
        return day_allocator.day_total(items, quote, day_index, options)

    def filtered_day_total(
        self,
        quote: Quote,
        day_items: Iterable[LineItem],
        options: Optional[PricingOptions] = None,
    ) -> float:
        return day_allocator.filtered_day_total(day_items, quote, options)

    def itinerary(self, quote: Quote, options: Optional[PricingOptions] = None) -> dict[int, float]:
        return day_allocator.itinerary_day_totals(quote, options)

    def display_price(self, item: LineItem, quote: Quote, options: Optional[PricingOptions] = None) -> float:
        return pricer.display_price(item, quote, options)

    def display_prices(self, quote: Quote, options: Optional[PricingOptions] = None) -> dict[str, float]:
        """Display price per item id (per night for multi-night hotels)."""
        return {
            entry.item.id: self.display_price(entry.item, quote, options)
            for entry in normalize_items(quote.items)
        }

    def average_markup(self, quote: Quote, options: Optional[PricingOptions] = None) -> float:
        return analytics.average_markup(quote, options)

    def markup_for_item_type(self, item_type: str) -> EffectiveMarkup:
        return markup_defaults.markup_for_item_type(item_type, self.settings.markup_defaults)

    def validate_markup(
        self,
        item_type: str,
        proposed_markup: float,
        markup_type: MarkupType = MarkupType.PERCENTAGE,
    ) -> MarkupValidation:
        """Check a proposed item markup against the configured minimum."""
        return markup_defaults.validate_markup(
            item_type, proposed_markup, markup_type, self.settings.markup_defaults
        )

    def validate_consistency(
        self,
        quote: Quote,
        observed_total: float,
        tolerance: Optional[float] = None,
    ) -> ConsistencyResult:
        if tolerance is None:
            tolerance = self.settings.consistency_tolerance
        return validation.validate_consistency(quote, observed_total, tolerance)

    def validate_hotel_pricing(self, quote: Quote) -> HotelPricingReport:
        return validation.validate_hotel_pricing(
            quote,
            high=self.settings.hotel_cost_high,
            low=self.settings.hotel_cost_low,
        )

    def summarize(self, quotes: Iterable[Quote], options: Optional[PricingOptions] = None) -> pd.DataFrame:
        """Dashboard frame with one row per quote."""
        quotes = list(quotes)
        logger.debug("Summarizing %d quotes", len(quotes))
        return analytics.summarize_quotes(quotes, options)
