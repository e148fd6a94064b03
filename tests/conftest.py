import sys
import os

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from quote_pricing.engine.models import LineItem, MarkupStrategy, MarkupType, Quote


def make_item(item_id="I-1", cost=100.0, quantity=1, markup=0.0, markup_type=MarkupType.PERCENTAGE,
              item_type="Tour", day_index=0, span_days=1, **kwargs) -> LineItem:
    return LineItem(
        id=item_id,
        cost=cost,
        quantity=quantity,
        markup_value=markup,
        markup_type=markup_type,
        item_type=item_type,
        day_index=day_index,
        span_days=span_days,
        **kwargs,
    )


def make_quote(items=(), markup=0.0, discount=0.0, strategy=None, quote_id="Q-1") -> Quote:
    return Quote(
        id=quote_id,
        global_markup_percent=markup,
        discount_percent=discount,
        markup_strategy=strategy,
        items=tuple(items),
    )


@pytest.fixture
def hotel_stay():
    """A three-night hotel stay starting on day 2, priced at $600 total."""
    return make_item("H-1", cost=600.0, markup=10.0, item_type="Hotel", day_index=2, span_days=3)


@pytest.fixture
def rome_quote(hotel_stay):
    """Flight, hotel (repeated per displayed day) and a tour."""
    flight = make_item("F-1", cost=420.0, quantity=2, item_type="Flight", day_index=0)
    tour = make_item("T-1", cost=80.0, quantity=2, markup=25.0, markup_type=MarkupType.FIXED,
                     item_type="Tour", day_index=3)
    return make_quote(
        items=[flight, hotel_stay, hotel_stay, hotel_stay, tour],
        markup=12.0,
        strategy=MarkupStrategy.MIXED,
        quote_id="Q-ROME",
    )
