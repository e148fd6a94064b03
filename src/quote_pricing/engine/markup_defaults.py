"""
Markup defaults per item type and minimum-markup checks.

The agent's default markup for an item type doubles as the minimum a
percentage markup may be set to. Fixed markups are not checked.
"""
from typing import Optional

from ..config.settings import MarkupDefaults
from .ingest import canonical_item_type, parse_markup_type
from .models import EffectiveMarkup, ItemType, MarkupType, MarkupValidation


def markup_for_item_type(item_type: str, defaults: Optional[MarkupDefaults] = None) -> EffectiveMarkup:
    """Default markup for a new item of ``item_type``."""
    defaults = defaults or MarkupDefaults()
    item_type = canonical_item_type(item_type)

    if item_type == ItemType.FLIGHT.value:
        return EffectiveMarkup(defaults.flight_markup, parse_markup_type(defaults.flight_markup_type))
    if item_type == ItemType.HOTEL.value:
        return EffectiveMarkup(defaults.hotel_markup, parse_markup_type(defaults.hotel_markup_type))
    if item_type == ItemType.TOUR.value:
        return EffectiveMarkup(defaults.activity_markup, parse_markup_type(defaults.activity_markup_type))
    if item_type == ItemType.TRANSFER.value:
        # Transfers follow the flight default
        return EffectiveMarkup(defaults.flight_markup, parse_markup_type(defaults.flight_markup_type))
    return EffectiveMarkup(0.0, MarkupType.PERCENTAGE)


def validate_markup(
    item_type: str,
    proposed_markup: float,
    markup_type: MarkupType = MarkupType.PERCENTAGE,
    defaults: Optional[MarkupDefaults] = None,
) -> MarkupValidation:
    """Check a proposed markup against the item type's minimum."""
    minimum = markup_for_item_type(item_type, defaults).value

    if parse_markup_type(markup_type) != MarkupType.PERCENTAGE:
        return MarkupValidation(is_valid=True, minimum_markup=minimum)

    if proposed_markup < minimum:
        label = canonical_item_type(item_type)
        return MarkupValidation(
            is_valid=False,
            minimum_markup=minimum,
            error=(
                f"Markup for {label} cannot be below the global minimum of {minimum:g}%. "
                f"Please set a markup of at least {minimum:g}% or update your global settings."
            ),
            adjusted_markup=minimum,
        )

    return MarkupValidation(is_valid=True, minimum_markup=minimum)


def enforce_minimum_markup(
    item_type: str,
    proposed_markup: float = 0.0,
    markup_type: MarkupType = MarkupType.PERCENTAGE,
    defaults: Optional[MarkupDefaults] = None,
) -> tuple[float, MarkupType, bool]:
    """
    Raise a percentage markup to the item type's minimum.

    Returns (markup, markup_type, was_adjusted).
    """
    markup_type = parse_markup_type(markup_type)
    if markup_type != MarkupType.PERCENTAGE:
        return proposed_markup, markup_type, False

    minimum = markup_for_item_type(item_type, defaults).value
    final = max(proposed_markup, minimum)
    return final, markup_type, final > proposed_markup
