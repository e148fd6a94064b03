"""
Day Allocator - attributes item prices to individual itinerary days.

Two entry points exist because callers hold items in two shapes:

- ``day_total`` takes the raw item list and works out which items touch the
  requested day, spreading multi-day items evenly over their span.
- ``filtered_day_total`` takes items a caller already expanded into one copy
  per displayed day (see ``expand_for_display``); each copy carries an
  ``original_span_days`` marker that is used as the divisor.

Both share ``_allocate`` and give the same figure for equivalent input.
Day totals are before discount.
"""
from dataclasses import replace
from typing import Callable, Iterable, Optional

from .models import LineItem, NormalizedItem, PricingOptions, Quote
from .normalizer import is_multi_day, normalize_items
from .pricer import price_item
from .strategy import strategy_for


def covers_day(item: LineItem, day_index: int) -> bool:
    """True if ``item`` starts on ``day_index`` or spans across it."""
    if item.day_index == day_index:
        return True
    if is_multi_day(item):
        return item.day_index <= day_index < item.day_index + item.span_days
    return False


def _day_share(price: float, divisor: int) -> float:
    if divisor <= 0:
        return 0.0
    return price / divisor


def _allocate(
    items: Iterable[LineItem],
    quote: Quote,
    options: Optional[PricingOptions],
    divisor_for: Callable[[NormalizedItem], int],
) -> float:
    options = options or PricingOptions()
    strategy = strategy_for(quote, options)

    total = 0.0
    for normalized in normalize_items(items):
        price = price_item(normalized.item, quote, strategy, options.include_quantity)
        total += _day_share(price, divisor_for(normalized))
    return total


def _span_divisor(normalized: NormalizedItem) -> int:
    return normalized.item.span_days if normalized.is_multi_day else 1


def _marker_divisor(normalized: NormalizedItem) -> int:
    if normalized.item.original_span_days:
        return normalized.item.original_span_days
    return _span_divisor(normalized)


def day_total(
    items: Iterable[LineItem],
    quote: Quote,
    day_index: int,
    options: Optional[PricingOptions] = None,
) -> float:
    """Total attributed to ``day_index`` from an unexpanded item list."""
    day_items = [item for item in items if covers_day(item, day_index)]
    return _allocate(day_items, quote, options, _span_divisor)


def filtered_day_total(
    day_items: Iterable[LineItem],
    quote: Quote,
    options: Optional[PricingOptions] = None,
) -> float:
    """Total of one day's items that were already expanded per day."""
    return _allocate(day_items, quote, options, _marker_divisor)


def expand_for_display(items: Iterable[LineItem]) -> list[LineItem]:
    """
    Repeat each multi-day item once per day it covers.

    Copies keep the item id and span, move ``day_index`` to the covered day
    and carry ``original_span_days`` so ``filtered_day_total`` can split the
    price without re-deriving the span.
    """
    expanded = []
    for normalized in normalize_items(items):
        item = normalized.item
        if not normalized.is_multi_day:
            expanded.append(item)
            continue
        for offset in range(item.span_days):
            expanded.append(replace(
                item,
                day_index=item.day_index + offset,
                original_span_days=item.span_days,
            ))
    return expanded


def group_by_day(items: Iterable[LineItem]) -> dict[int, list[LineItem]]:
    """Bucket items by their ``day_index``, in day order."""
    days: dict[int, list[LineItem]] = {}
    for item in items:
        days.setdefault(item.day_index, []).append(item)
    return dict(sorted(days.items()))


def itinerary_day_totals(quote: Quote, options: Optional[PricingOptions] = None) -> dict[int, float]:
    """Total for every day touched by the quote's items."""
    days = set()
    for normalized in normalize_items(quote.items):
        item = normalized.item
        span = item.span_days if normalized.is_multi_day else 1
        days.update(range(item.day_index, item.day_index + span))

    return {day: day_total(quote.items, quote, day, options) for day in sorted(days)}
