"""Per-day allocation, in both the raw and the pre-expanded call form."""
import pytest

from conftest import make_item, make_quote
from quote_pricing.engine.aggregator import quote_total
from quote_pricing.engine.day_allocator import (
    covers_day,
    day_total,
    expand_for_display,
    filtered_day_total,
    group_by_day,
    itinerary_day_totals,
)
from quote_pricing.engine.models import PricingOptions


def test_covers_day(hotel_stay):
    flight = make_item("F-1", item_type="Flight", day_index=2, span_days=3)

    assert [covers_day(hotel_stay, d) for d in range(1, 6)] == [False, True, True, True, False]
    assert covers_day(flight, 2)
    assert not covers_day(flight, 3)


def test_single_day_items_contribute_full_price():
    flight = make_item("F-1", cost=420.0, quantity=2, item_type="Flight", day_index=0)
    tour = make_item("T-1", cost=80.0, item_type="Tour", day_index=0)
    quote = make_quote([flight, tour], markup=10.0)

    assert day_total(quote.items, quote, 0) == pytest.approx((840.0 + 80.0) * 1.1)
    assert day_total(quote.items, quote, 1) == 0


def test_expand_for_display_repeats_stay_per_day(hotel_stay):
    tour = make_item("T-1", day_index=3)

    expanded = expand_for_display([hotel_stay, hotel_stay, tour])

    hotel_copies = [i for i in expanded if i.id == "H-1"]
    assert [i.day_index for i in hotel_copies] == [2, 3, 4]
    assert all(i.original_span_days == 3 for i in hotel_copies)
    assert all(i.span_days == 3 for i in hotel_copies)
    assert expanded[-1] is tour


def test_both_call_forms_agree(rome_quote):
    days = group_by_day(expand_for_display(rome_quote.items))

    assert list(days) == [0, 2, 3, 4]
    for day, day_items in days.items():
        raw = day_total(rome_quote.items, rome_quote, day)
        filtered = filtered_day_total(day_items, rome_quote)
        assert abs(raw - filtered) < 1e-6, f"Day {day}: raw {raw} != filtered {filtered}"


def test_marker_is_divisor_for_filtered_items():
    # A per-day copy that no longer carries the span itself
    copy = make_item("H-9", cost=300.0, item_type="Hotel", day_index=1, span_days=1,
                     original_span_days=3)
    quote = make_quote([copy], markup=0.0)

    assert filtered_day_total([copy], quote) == pytest.approx(100.0)


def test_filtered_day_total_empty():
    assert filtered_day_total([], make_quote([])) == 0


def test_itinerary_days_sum_to_undiscounted_total(rome_quote):
    days = itinerary_day_totals(rome_quote)

    assert list(days) == [0, 2, 3, 4]
    no_discount = quote_total(rome_quote, PricingOptions(include_discount=False))
    assert abs(sum(days.values()) - no_discount) < 1e-6


def test_day_total_respects_quantity_option():
    flight = make_item("F-1", cost=400.0, quantity=2, item_type="Flight", day_index=2)
    quote = make_quote([flight], markup=0.0)

    assert day_total(quote.items, quote, 2, PricingOptions(include_quantity=False)) == pytest.approx(400.0)
