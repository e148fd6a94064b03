"""
Item Pricer - sell price of a single line item.

A percentage markup scales with the extended base (cost × quantity); a fixed
markup is added once per line regardless of quantity.
"""
from typing import Optional

from .models import (
    EffectiveMarkup,
    ItemType,
    LineItem,
    MarkupStrategy,
    MarkupType,
    PricedLine,
    PricingOptions,
    Quote,
)
from .normalizer import is_multi_day
from .strategy import effective_markup, strategy_for


def _base(item: LineItem, include_quantity: bool) -> float:
    return item.cost * (item.quantity if include_quantity else 1)


def _markup_amount(base: float, markup: EffectiveMarkup) -> float:
    if markup.markup_type == MarkupType.PERCENTAGE:
        return base * (markup.value / 100.0)
    return markup.value


def price_item(
    item: LineItem,
    quote: Quote,
    strategy: MarkupStrategy,
    include_quantity: bool = True,
) -> float:
    """Price one line item under an already resolved strategy."""
    base = _base(item, include_quantity)
    return base + _markup_amount(base, effective_markup(item, quote, strategy))


def price_line(
    item: LineItem,
    quote: Quote,
    strategy: MarkupStrategy,
    include_quantity: bool = True,
) -> PricedLine:
    """Price one line item and record how the price was reached."""
    base = _base(item, include_quantity)
    markup = effective_markup(item, quote, strategy)
    amount = _markup_amount(base, markup)

    line = PricedLine(
        item_id=item.id,
        item_type=item.item_type,
        base=base,
        markup_value=markup.value,
        markup_type=markup.markup_type,
        markup_amount=amount,
        price=base + amount,
        is_multi_day=is_multi_day(item),
        span_days=item.span_days,
    )

    if include_quantity:
        line.add_trace("Base", f"Quantity {item.quantity} × ${item.cost:.2f}", f"${base:.2f}")
    else:
        line.add_trace("Base", "Unit cost (quantity excluded)", f"${base:.2f}")

    source = markup.source
    if markup.markup_type == MarkupType.PERCENTAGE:
        line.add_trace("Markup", f"{markup.value:g}% {source} markup ({strategy.value})", f"${amount:.2f}")
    else:
        line.add_trace("Markup", f"Fixed {source} markup ({strategy.value})", f"${amount:.2f}")

    line.add_trace("Price", "Base + markup", f"${line.price:.2f}")
    return line


def display_price(item: LineItem, quote: Quote, options: Optional[PricingOptions] = None) -> float:
    """
    Price shown next to an item in the itinerary.

    Hotels spanning several nights show a per-night figure; everything else
    shows the full item price.
    """
    options = options or PricingOptions()
    price = price_item(item, quote, strategy_for(quote, options), options.include_quantity)

    if item.item_type == ItemType.HOTEL.value and item.span_days > 1:
        return price / item.span_days
    return price
