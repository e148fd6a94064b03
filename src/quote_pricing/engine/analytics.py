"""
Markup Analytics - effective markup figures for reporting.

``average_markup`` works on one quote; the DataFrame helpers roll many
quotes up for dashboard metrics.
"""
from typing import Iterable, Optional

import pandas as pd

from .aggregator import calculate_total, subtotal
from .models import MarkupStrategy, PricingOptions, Quote
from .normalizer import normalize_items
from .pricer import price_item
from .strategy import strategy_for


def average_markup(quote: Quote, options: Optional[PricingOptions] = None) -> float:
    """
    Effective markup percentage of a quote.

    Under the GLOBAL strategy this is the quote's global markup percent.
    Otherwise it is the cost-weighted markup over deduplicated items:
    (Σ price - Σ cost×qty) / Σ cost×qty × 100, or 0 when there is no cost.

    The base always counts quantity, while prices follow
    ``options.include_quantity``. With ``include_quantity=False`` the two
    disagree, so the figure understates the markup and can turn negative.
    This matches the figure the booking screens have always shown.
    """
    options = options or PricingOptions()
    strategy = strategy_for(quote, options)

    if strategy == MarkupStrategy.GLOBAL:
        return quote.global_markup_percent

    sum_base = 0.0
    sum_priced = 0.0
    for normalized in normalize_items(quote.items):
        item = normalized.item
        sum_base += item.cost * item.quantity
        sum_priced += price_item(item, quote, strategy, options.include_quantity)

    if sum_base == 0:
        return 0.0
    return (sum_priced - sum_base) / sum_base * 100


SUMMARY_COLUMNS = [
    'quote_id', 'strategy', 'item_count', 'subtotal', 'total',
    'is_placeholder_total', 'average_markup',
]


def summarize_quotes(quotes: Iterable[Quote], options: Optional[PricingOptions] = None) -> pd.DataFrame:
    """One row per quote with its totals and average markup."""
    options = options or PricingOptions()
    rows = []
    for quote in quotes:
        total = calculate_total(quote, options)
        rows.append({
            'quote_id': quote.id,
            'strategy': strategy_for(quote, options).value,
            'item_count': len(normalize_items(quote.items)),
            'subtotal': subtotal(quote, options),
            'total': total.amount,
            'is_placeholder_total': total.is_placeholder_total,
            'average_markup': average_markup(quote, options),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def markup_by_item_type(quotes: Iterable[Quote], options: Optional[PricingOptions] = None) -> pd.DataFrame:
    """
    Base cost, sell price and effective markup % per item type.

    Indexed by item type; multi-day items are counted once per quote.
    """
    options = options or PricingOptions()
    rows = []
    for quote in quotes:
        strategy = strategy_for(quote, options)
        for normalized in normalize_items(quote.items):
            item = normalized.item
            rows.append({
                'item_type': item.item_type,
                'base': item.cost * item.quantity,
                'price': price_item(item, quote, strategy, options.include_quantity),
            })

    if not rows:
        return pd.DataFrame(
            columns=['base', 'price', 'markup_percent'],
            index=pd.Index([], name='item_type'),
        )

    grouped = pd.DataFrame(rows).groupby('item_type')[['base', 'price']].sum()
    grouped['markup_percent'] = 0.0
    has_base = grouped['base'] != 0
    grouped.loc[has_base, 'markup_percent'] = (
        (grouped.loc[has_base, 'price'] - grouped.loc[has_base, 'base'])
        / grouped.loc[has_base, 'base'] * 100
    )
    return grouped
