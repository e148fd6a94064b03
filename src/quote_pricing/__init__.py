"""
Quote Pricing Package

Markup and pricing engine for travel-agency quotes.
Turns quote line items (flights, hotels, tours, transfers) into a sell price
under a Global / Individual / Mixed markup strategy, with multi-day items
counted once and spread across itinerary days.
"""

__version__ = "1.0.0"
