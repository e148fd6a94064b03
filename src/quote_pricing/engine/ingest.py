"""
Ingestion - builds immutable Quote/LineItem snapshots from loose records.

Records arrive as dicts from CSV exports, API payloads or the persistence
layer. Field names vary (``nights`` / ``numberOfNights`` / check-in and
check-out dates / ``span_days`` all describe a duration), so they are
resolved here once into the canonical ``LineItem.span_days``.

Nothing in this module raises on malformed numbers: every field has a
documented default.
"""
import logging
import math
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from .models import ItemType, LineItem, MarkupStrategy, MarkupType, Quote

logger = logging.getLogger(__name__)

_ITEM_TYPE_ALIASES = {
    'flight': ItemType.FLIGHT.value,
    'hotel': ItemType.HOTEL.value,
    'tour': ItemType.TOUR.value,
    'activity': ItemType.TOUR.value,
    'transfer': ItemType.TRANSFER.value,
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _lookup(record: Mapping, *keys: str) -> Any:
    """First non-blank value for any of ``keys``, checking ``details`` too."""
    details = record.get('details') if isinstance(record.get('details'), Mapping) else {}
    for source in (record, details):
        for key in keys:
            value = source.get(key)
            if not _is_blank(value):
                return value
    return None


def _as_float(value: Any, default: float) -> float:
    if _is_blank(value):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(result) else result


def _as_int(value: Any, default: int) -> int:
    number = _as_float(value, float(default))
    if math.isinf(number):
        return default
    return int(number)


def _as_date(value: Any) -> Optional[date]:
    if _is_blank(value):
        return None
    if isinstance(value, date):
        return value
    try:
        # Accept full timestamps by keeping the calendar date part
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def nights_between(check_in: Any, check_out: Any) -> Optional[int]:
    """Number of nights between two dates, or None if either is unusable."""
    start = _as_date(check_in)
    end = _as_date(check_out)
    if start is None or end is None:
        return None
    return (end - start).days


def resolve_span_days(record: Mapping) -> int:
    """
    Resolve the canonical span of a record.

    Sources are checked in order: span_days, nights, number_of_nights, then
    the check-in/check-out date pair. The first one greater than 1 wins, so
    any duration source longer than a day makes the item multi-day.
    """
    candidates = [
        _as_int(_lookup(record, 'span_days', 'spanDays'), 0),
        _as_int(_lookup(record, 'nights'), 0),
        _as_int(_lookup(record, 'number_of_nights', 'numberOfNights'), 0),
    ]
    nights = nights_between(
        _lookup(record, 'check_in_date', 'checkInDate', 'check_in'),
        _lookup(record, 'check_out_date', 'checkOutDate', 'check_out'),
    )
    if nights is not None:
        candidates.append(nights)

    for candidate in candidates:
        if candidate > 1:
            return candidate
    return 1


def parse_markup_strategy(value: Any) -> Optional[MarkupStrategy]:
    """Parse a strategy name; unknown or blank values mean "not declared"."""
    if isinstance(value, MarkupStrategy):
        return value
    if _is_blank(value):
        return None
    try:
        return MarkupStrategy(str(value).strip().lower())
    except ValueError:
        logger.debug("Ignoring unknown markup strategy %r", value)
        return None


def parse_markup_type(value: Any) -> MarkupType:
    if isinstance(value, MarkupType):
        return value
    if _is_blank(value):
        return MarkupType.PERCENTAGE
    try:
        return MarkupType(str(value).strip().lower())
    except ValueError:
        return MarkupType.PERCENTAGE


def canonical_item_type(value: Any) -> str:
    """Canonical spelling of a known item type; unknown types pass through."""
    if isinstance(value, ItemType):
        return value.value
    if _is_blank(value):
        return ItemType.TOUR.value
    text = str(value).strip()
    return _ITEM_TYPE_ALIASES.get(text.lower(), text)


def line_item_from_record(record: Mapping, position: int = 0) -> LineItem:
    """Build a LineItem from a loose record, applying every default."""
    item_id = _lookup(record, 'id', 'item_id')
    quantity = _as_int(_lookup(record, 'quantity'), 1)
    original_span = _as_int(_lookup(record, 'original_span_days', 'originalSpanDays'), 0)

    return LineItem(
        id=str(item_id) if item_id is not None else f"item-{position}",
        cost=_as_float(_lookup(record, 'cost'), 0.0),
        quantity=quantity if quantity >= 1 else 1,
        markup_value=_as_float(_lookup(record, 'markup_value', 'markup'), 0.0),
        markup_type=parse_markup_type(_lookup(record, 'markup_type', 'markupType')),
        item_type=canonical_item_type(_lookup(record, 'item_type', 'itemType')),
        day_index=_as_int(_lookup(record, 'day_index', 'dayIndex'), 0),
        span_days=resolve_span_days(record),
        name=str(_lookup(record, 'name', 'item_name') or ''),
        original_span_days=original_span if original_span > 0 else None,
    )


def line_items_from_records(records: Iterable[Mapping]) -> tuple[LineItem, ...]:
    return tuple(line_item_from_record(r, i) for i, r in enumerate(records))


def quote_from_record(record: Mapping) -> Quote:
    """Build a Quote (and its items) from a loose record."""
    items = record.get('items')
    if items is None:
        items = record.get('quote_items')

    quote_id = record.get('id')
    return Quote(
        id=str(quote_id) if not _is_blank(quote_id) else "",
        global_markup_percent=_as_float(
            _lookup(record, 'global_markup_percent', 'markup'), 0.0
        ),
        discount_percent=_as_float(_lookup(record, 'discount_percent', 'discount'), 0.0),
        markup_strategy=parse_markup_strategy(
            _lookup(record, 'markup_strategy', 'markupStrategy')
        ),
        items=line_items_from_records(items or []),
    )
