"""Engine subpackage - markup strategy, item pricing and quote totals."""
from .pricing_engine import QuotePricingEngine
from .models import (
    LineItem,
    MarkupStrategy,
    MarkupType,
    ItemType,
    PricingOptions,
    Quote,
    QuoteResult,
    QuoteTotal,
)
from .ingest import quote_from_record, line_item_from_record

__all__ = [
    'QuotePricingEngine', 'LineItem', 'MarkupStrategy', 'MarkupType', 'ItemType',
    'PricingOptions', 'Quote', 'QuoteResult', 'QuoteTotal',
    'quote_from_record', 'line_item_from_record',
]
