import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

import pandas as pd

from quote_pricing.config.settings import get_settings
from quote_pricing.data.snapshots import load_default_snapshots
from quote_pricing.engine import QuotePricingEngine
from quote_pricing.engine.analytics import markup_by_item_type


def report():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = get_settings()
    engine = QuotePricingEngine(settings)

    quotes = load_default_snapshots(settings)
    print(f"Loaded {len(quotes)} quotes from {settings.quotes_csv.parent}")

    with pd.option_context('display.width', 120, 'display.float_format', '{:,.2f}'.format):
        print("\nQuote Summary:")
        print(engine.summarize(quotes).to_string(index=False))

        print("\nMarkup by Item Type:")
        print(markup_by_item_type(quotes).to_string())

    for quote in quotes:
        result = engine.calculate(quote)
        summary = result.to_summary_dict()
        print(f"\n--- {summary['Quote']} ({summary['Strategy']}) ---")
        print(result.get_trace_text())
        if summary["Lines"]:
            with pd.option_context('display.float_format', '{:,.2f}'.format):
                print(pd.DataFrame(summary["Lines"]).to_string(index=False))
        for day, total in engine.itinerary(quote).items():
            print(f"  Day {day + 1}: ${total:,.2f}")
        for warning in result.warnings:
            print(f"  WARNING: {warning}")


if __name__ == "__main__":
    report()
