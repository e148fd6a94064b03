"""
Centralized settings and path configuration for the quote pricing engine.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class MarkupDefaults:
    """Agent default markups per item type (also the minimum allowed percentage)."""
    flight_markup: float = 10.0
    flight_markup_type: str = 'percentage'
    hotel_markup: float = 15.0
    hotel_markup_type: str = 'percentage'
    activity_markup: float = 20.0
    activity_markup_type: str = 'percentage'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Snapshot exports handed over by the persistence side
    quotes_csv: Path
    quote_items_csv: Path

    # Consistency check between a displayed total and a recomputed one
    consistency_tolerance: float = 0.01

    # Advisory hotel cost bounds
    hotel_cost_high: float = 1000.0
    hotel_cost_low: float = 10.0

    # Bound on the API process total cache
    cache_max_size: int = 1024

    markup_defaults: MarkupDefaults = field(default_factory=MarkupDefaults)

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        data_dir = os.environ.get('QUOTE_PRICING_DATA_DIR')
        data_path = Path(data_dir) if data_dir else root / 'data'

        return cls(
            project_root=root,
            quotes_csv=data_path / 'quotes.csv',
            quote_items_csv=data_path / 'quote_items.csv',
            consistency_tolerance=_env_float('QUOTE_PRICING_TOLERANCE', 0.01),
            hotel_cost_high=_env_float('QUOTE_PRICING_HOTEL_HIGH', 1000.0),
            hotel_cost_low=_env_float('QUOTE_PRICING_HOTEL_LOW', 10.0),
            cache_max_size=int(_env_float('QUOTE_PRICING_CACHE_SIZE', 1024)),
            markup_defaults=MarkupDefaults(
                flight_markup=_env_float('QUOTE_PRICING_FLIGHT_MARKUP', 10.0),
                hotel_markup=_env_float('QUOTE_PRICING_HOTEL_MARKUP', 15.0),
                activity_markup=_env_float('QUOTE_PRICING_ACTIVITY_MARKUP', 20.0),
            ),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
