"""
Explicit cache of quote totals.

Totals are never written back onto a quote. Callers that want to avoid
recomputation hold a QuoteTotalCache; entries are keyed by the quote id, a
fingerprint of its items, its markup and discount, and the pricing options,
so an edited snapshot cannot hit a stale entry. ``invalidate`` drops every
entry of a quote id.

The cache holds at most ``max_size`` entries and evicts the least recently
used one when full. Storing a total for an edited quote also drops the
entries of that quote id computed from older item sets.
"""
import hashlib
import logging
import threading
from collections import OrderedDict
from typing import Optional

from .aggregator import calculate_total
from .models import LineItem, PricingOptions, Quote, QuoteTotal

logger = logging.getLogger(__name__)


def items_fingerprint(items: tuple[LineItem, ...]) -> str:
    """Stable SHA256 of the item set's contents, in order."""
    digest = hashlib.sha256()
    for item in items:
        digest.update(repr((
            item.id, item.cost, item.quantity, item.markup_value,
            item.markup_type.value, item.item_type, item.day_index,
            item.span_days, item.original_span_days,
        )).encode('utf-8'))
    return digest.hexdigest()


def cache_key(quote: Quote, options: PricingOptions) -> tuple:
    strategy = quote.markup_strategy.value if quote.markup_strategy else None
    override = options.markup_strategy.value if options.markup_strategy else None
    return (
        quote.id,
        items_fingerprint(quote.items),
        quote.global_markup_percent,
        quote.discount_percent,
        strategy,
        options.include_discount,
        options.include_quantity,
        override,
    )


class QuoteTotalCache:
    """Thread-safe memo of ``calculate_total`` results."""

    def __init__(self, max_size: int = 1024):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: OrderedDict[tuple, QuoteTotal] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get_total(self, quote: Quote, options: Optional[PricingOptions] = None) -> QuoteTotal:
        """Cached total for ``quote``, computing it on a miss."""
        options = options or PricingOptions()
        key = cache_key(quote, options)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached

        total = calculate_total(quote, options)

        with self._lock:
            self.misses += 1
            self._store(key, total)
        return total

    def _store(self, key: tuple, total: QuoteTotal):
        # Entries of the same quote id under another fingerprint are stale
        superseded = [k for k in self._entries if k[0] == key[0] and k[1] != key[1]]
        for stale in superseded:
            del self._entries[stale]

        self._entries[key] = total
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            self.evictions += 1
            logger.debug("Evicted cached total for quote %s", evicted[0])

    def invalidate(self, quote_id: str) -> int:
        """Drop all entries for ``quote_id``; returns how many were removed."""
        with self._lock:
            stale = [key for key in self._entries if key[0] == quote_id]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cached totals for quote %s", len(stale), quote_id)
        return len(stale)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
