"""
Multi-day item normalizer.

A multi-night hotel stay is one LineItem, but display code often repeats it
once per itinerary day. Those repeats share the item id and must be counted
once before anything is summed.
"""
import logging
from typing import Iterable

from .models import ItemType, LineItem, NormalizedItem

logger = logging.getLogger(__name__)


def is_multi_day(item: LineItem) -> bool:
    """True for hotel items whose canonical span covers more than one day."""
    return item.item_type == ItemType.HOTEL.value and item.span_days > 1


def normalize_items(items: Iterable[LineItem]) -> list[NormalizedItem]:
    """
    Drop repeated references to the same multi-day item.

    Only multi-day items are deduplicated by id; distinct single-day items may
    legitimately share an id, cost or name.
    """
    normalized = []
    seen_ids = set()

    for item in items:
        multi_day = is_multi_day(item)
        if multi_day and item.id in seen_ids:
            logger.debug("Skipping repeated multi-day item %s", item.id)
            continue
        seen_ids.add(item.id)
        normalized.append(NormalizedItem(item=item, is_multi_day=multi_day))

    return normalized
