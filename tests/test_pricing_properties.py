"""
Pricing behaviour every caller relies on: markup arithmetic, multi-day
deduplication, discount ordering, strategy precedence and the empty-quote
fallback.
"""
import pytest

from conftest import make_item, make_quote
from quote_pricing.engine.aggregator import calculate_total, quote_total, subtotal
from quote_pricing.engine.analytics import average_markup
from quote_pricing.engine.day_allocator import day_total
from quote_pricing.engine.models import MarkupStrategy, MarkupType, PricingOptions
from quote_pricing.engine.pricer import display_price, price_item
from quote_pricing.engine.strategy import effective_markup, resolve_strategy


def test_percentage_markup_scales_with_quantity():
    item = make_item(cost=100.0, quantity=2, markup=10.0)
    quote = make_quote([item])
    assert price_item(item, quote, MarkupStrategy.INDIVIDUAL) == pytest.approx(220.0)


def test_fixed_markup_added_once_per_line():
    item = make_item(cost=100.0, quantity=3, markup=15.0, markup_type=MarkupType.FIXED)
    quote = make_quote([item])
    assert price_item(item, quote, MarkupStrategy.INDIVIDUAL) == pytest.approx(315.0)


def test_price_without_quantity_uses_unit_cost():
    item = make_item(cost=100.0, quantity=3, markup=10.0)
    quote = make_quote([item])
    assert price_item(item, quote, MarkupStrategy.INDIVIDUAL, include_quantity=False) == pytest.approx(110.0)


def test_repeated_multi_day_hotel_counted_once():
    hotel = make_item("H-1", cost=900.0, item_type="Hotel", span_days=3)
    repeats = [hotel, make_item("H-1", cost=900.0, item_type="Hotel", day_index=1, span_days=3),
               make_item("H-1", cost=900.0, item_type="Hotel", day_index=2, span_days=3)]
    quote = make_quote(repeats, markup=10.0)

    assert quote_total(quote) == pytest.approx(990.0)


def test_single_day_items_sharing_an_id_are_all_counted():
    items = [make_item("T-1", cost=50.0), make_item("T-1", cost=50.0)]
    quote = make_quote(items)
    assert quote_total(quote) == pytest.approx(100.0)


def test_day_totals_over_span_reproduce_item_price(hotel_stay):
    quote = make_quote([hotel_stay])
    full_price = price_item(hotel_stay, quote, resolve_strategy(quote))

    days = [day_total(quote.items, quote, day) for day in (2, 3, 4)]

    assert full_price == pytest.approx(660.0)
    assert abs(sum(days) - full_price) < 1e-6
    assert day_total(quote.items, quote, 1) == 0
    assert day_total(quote.items, quote, 5) == 0


def test_global_average_markup_is_quote_markup():
    items = [make_item("A", cost=100.0, markup=40.0), make_item("B", cost=300.0, markup=5.0)]
    quote = make_quote(items, markup=12.5, strategy=MarkupStrategy.GLOBAL)
    assert average_markup(quote) == 12.5


def test_individual_average_markup_is_cost_weighted():
    items = [make_item("A", cost=100.0, markup=10.0), make_item("B", cost=200.0, markup=20.0)]
    quote = make_quote(items)

    assert resolve_strategy(quote) == MarkupStrategy.INDIVIDUAL
    assert average_markup(quote) == pytest.approx(16.6667, abs=0.001)


def test_average_markup_zero_when_no_cost():
    items = [make_item("A", cost=0.0, markup=25.0, markup_type=MarkupType.FIXED)]
    quote = make_quote(items)
    assert average_markup(quote) == 0


def test_discount_applies_after_markup():
    item = make_item(cost=100.0, quantity=2, markup=10.0)
    quote = make_quote([item], discount=10.0)

    assert subtotal(quote) == pytest.approx(220.0)
    assert quote_total(quote) == pytest.approx(198.0)
    assert quote_total(quote, PricingOptions(include_discount=False)) == pytest.approx(220.0)


def test_empty_quote_reports_markup_as_placeholder_total():
    quote = make_quote([], markup=12.5, discount=50.0)

    total = calculate_total(quote)

    assert total.amount == 12.5
    assert total.is_placeholder_total is True
    assert quote_total(quote) == 12.5


def test_real_total_is_not_flagged_placeholder():
    quote = make_quote([make_item(cost=10.0)], markup=12.5)
    assert calculate_total(quote).is_placeholder_total is False


def test_explicit_global_overrides_item_markups():
    items = [make_item("A", cost=100.0, markup=50.0), make_item("B", cost=100.0, markup=30.0)]
    quote = make_quote(items, markup=10.0, strategy=MarkupStrategy.GLOBAL)

    assert resolve_strategy(quote) == MarkupStrategy.GLOBAL
    assert quote_total(quote) == pytest.approx(220.0)


def test_strategy_inference():
    assert resolve_strategy(make_quote([])) == MarkupStrategy.GLOBAL
    assert resolve_strategy(make_quote([make_item(markup=0.0)])) == MarkupStrategy.GLOBAL
    assert resolve_strategy(make_quote([make_item(markup=0.0), make_item(markup=5.0)])) == \
        MarkupStrategy.INDIVIDUAL


def test_mixed_is_never_inferred():
    quotes = [
        make_quote([]),
        make_quote([make_item(markup=0.0)]),
        make_quote([make_item(markup=0.0), make_item(markup=8.0)]),
    ]
    assert all(resolve_strategy(q) != MarkupStrategy.MIXED for q in quotes)
    assert resolve_strategy(make_quote([], strategy=MarkupStrategy.MIXED)) == MarkupStrategy.MIXED


def test_mixed_falls_back_to_global_for_unmarked_items():
    marked = make_item("A", cost=100.0, markup=25.0, markup_type=MarkupType.FIXED)
    unmarked = make_item("B", cost=100.0)
    quote = make_quote([marked, unmarked], markup=20.0, strategy=MarkupStrategy.MIXED)

    assert effective_markup(marked, quote, MarkupStrategy.MIXED).markup_type == MarkupType.FIXED
    assert effective_markup(unmarked, quote, MarkupStrategy.MIXED).value == 20.0
    assert quote_total(quote) == pytest.approx(125.0 + 120.0)


def test_options_strategy_overrides_quote():
    item = make_item(cost=100.0, markup=50.0)
    quote = make_quote([item], markup=10.0)

    assert quote_total(quote) == pytest.approx(150.0)
    assert quote_total(quote, PricingOptions(markup_strategy=MarkupStrategy.GLOBAL)) == pytest.approx(110.0)


def test_display_price_is_per_night_for_hotel_stays(hotel_stay):
    quote = make_quote([hotel_stay])
    assert display_price(hotel_stay, quote) == pytest.approx(220.0)


def test_display_price_is_full_price_for_other_items():
    flight = make_item(cost=420.0, quantity=2, item_type="Flight", span_days=3)
    quote = make_quote([flight], markup=10.0)
    assert display_price(flight, quote) == pytest.approx(924.0)


def test_calculations_leave_snapshots_untouched(rome_quote):
    before = repr(rome_quote)
    quote_total(rome_quote)
    average_markup(rome_quote)
    day_total(rome_quote.items, rome_quote, 3)
    assert repr(rome_quote) == before


def test_strategy_inference_is_logged(caplog):
    quote = make_quote([make_item(markup=5.0)], quote_id="Q-LOG")
    with caplog.at_level("DEBUG", logger="quote_pricing.engine.strategy"):
        assert resolve_strategy(quote) == MarkupStrategy.INDIVIDUAL

    assert "Q-LOG" in caplog.text
    assert "individual" in caplog.text


def test_average_markup_without_quantity_keeps_full_base():
    quote = make_quote([make_item(cost=100.0, quantity=2, markup=10.0)])

    # Base counts both units, prices only one
    result = average_markup(quote, PricingOptions(include_quantity=False))
    assert result == pytest.approx((110.0 - 200.0) / 200.0 * 100)
