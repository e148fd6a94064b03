"""Shared engine and total cache for the API process."""
from ..engine import QuotePricingEngine
from ..engine.cache import QuoteTotalCache

engine = QuotePricingEngine()
total_cache = QuoteTotalCache(max_size=engine.settings.cache_max_size)
