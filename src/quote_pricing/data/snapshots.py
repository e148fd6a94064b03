"""
Snapshot loader - reads quote and line item CSV exports into Quote objects.

quotes.csv columns:      id, markup, discount, markup_strategy
quote_items.csv columns: quote_id, id, item_type, cost, quantity, markup,
                         markup_type, day_index, span_days, nights,
                         check_in_date, check_out_date, name
Any column may be missing or blank; ingestion applies the defaults.
"""
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.ingest import quote_from_record
from ..engine.models import Quote

logger = logging.getLogger(__name__)


def _load_csv(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found at {path}.")
    df = pd.read_csv(path, dtype=str).fillna('')
    df.columns = [c.strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()
    return df


def load_quote_snapshots(quotes_csv: Path, items_csv: Path) -> list[Quote]:
    """Load quotes with their items, keeping item order from the export."""
    quotes_df = _load_csv(quotes_csv)
    items_df = _load_csv(items_csv)

    if 'quote_id' in items_df.columns:
        items_by_quote = {
            quote_id: group.drop(columns=['quote_id']).to_dict(orient='records')
            for quote_id, group in items_df.groupby('quote_id', sort=False)
        }
    else:
        items_by_quote = {}

    quotes = []
    for record in quotes_df.to_dict(orient='records'):
        record['items'] = items_by_quote.get(record.get('id', ''), [])
        quotes.append(quote_from_record(record))

    logger.info(
        "Loaded %d quotes (%d item rows) from %s", len(quotes), len(items_df), quotes_csv.parent
    )
    return quotes


def load_default_snapshots(settings: Optional[Settings] = None) -> list[Quote]:
    """Load the snapshot pair configured in settings."""
    settings = settings or get_settings()
    return load_quote_snapshots(settings.quotes_csv, settings.quote_items_csv)
