"""
Data models for the quote pricing engine.

Quote and LineItem are frozen snapshots owned by the caller; every
calculation returns a new derived value instead of writing back onto them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MarkupStrategy(str, Enum):
    """How markup is chosen for the items of a quote."""
    GLOBAL = "global"
    INDIVIDUAL = "individual"
    MIXED = "mixed"


class MarkupType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ItemType(str, Enum):
    FLIGHT = "Flight"
    HOTEL = "Hotel"
    TOUR = "Tour"
    TRANSFER = "Transfer"


@dataclass(frozen=True)
class LineItem:
    """A single quote line item as supplied by the persistence side."""
    id: str
    cost: float = 0.0  # total cost of the stay for multi-night hotels
    quantity: int = 1
    markup_value: float = 0.0
    markup_type: MarkupType = MarkupType.PERCENTAGE
    item_type: str = ItemType.TOUR.value
    day_index: int = 0
    span_days: int = 1
    name: str = ""

    # Set on per-day copies of a multi-day item expanded for display
    original_span_days: Optional[int] = None


@dataclass(frozen=True)
class Quote:
    """A quote snapshot with its ordered line items."""
    id: str
    global_markup_percent: float = 0.0
    discount_percent: float = 0.0
    markup_strategy: Optional[MarkupStrategy] = None
    items: tuple[LineItem, ...] = ()


@dataclass(frozen=True)
class PricingOptions:
    """Per-call switches for pricing operations."""
    include_discount: bool = True
    include_quantity: bool = True
    # Overrides the quote's own (explicit or inferred) strategy for one call
    markup_strategy: Optional[MarkupStrategy] = None


@dataclass(frozen=True)
class NormalizedItem:
    """A line item that survived multi-day deduplication."""
    item: LineItem
    is_multi_day: bool


@dataclass(frozen=True)
class EffectiveMarkup:
    value: float
    markup_type: MarkupType
    source: str = "item"  # "quote" when the global rate applies


@dataclass
class TraceStep:
    """A single step in the pricing trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class PricedLine:
    """One priced line item with the steps that produced its price."""
    item_id: str
    item_type: str
    base: float
    markup_value: float
    markup_type: MarkupType
    markup_amount: float
    price: float
    is_multi_day: bool = False
    span_days: int = 1
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass(frozen=True)
class QuoteTotal:
    """
    Total of a quote.

    For a quote without items the legacy behaviour reports the global markup
    percent as the "total"; ``is_placeholder_total`` marks that case so callers
    can tell it apart from a real sum.
    """
    amount: float
    is_placeholder_total: bool = False


@dataclass
class QuoteResult:
    """Complete result of pricing a quote."""
    quote_id: str
    strategy: MarkupStrategy
    subtotal: float
    discount_amount: float
    total: float
    is_placeholder_total: bool = False
    lines: list[PricedLine] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a result-level warning."""
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable result trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_summary_dict(self) -> dict:
        """Flat dict form for dashboards and JSON responses."""
        return {
            "Quote": self.quote_id,
            "Strategy": self.strategy.value,
            "Subtotal": self.subtotal,
            "Discount": self.discount_amount,
            "Total": self.total,
            "Placeholder": self.is_placeholder_total,
            "Lines": [
                {
                    "Item": line.item_id,
                    "Type": line.item_type,
                    "Base": line.base,
                    "Markup": line.markup_amount,
                    "Price": line.price,
                    "Multi-Day": line.is_multi_day,
                }
                for line in self.lines
            ],
        }


@dataclass(frozen=True)
class ConsistencyResult:
    is_valid: bool
    difference: float
    expected_total: float
    message: str


@dataclass(frozen=True)
class PricingIssue:
    """An advisory finding about one line item."""
    item_id: str
    issue: str
    severity: str  # "warning"; "error" is reserved
    original_cost: float


@dataclass
class HotelPricingReport:
    is_valid: bool
    issues: list[PricingIssue] = field(default_factory=list)


@dataclass(frozen=True)
class MarkupValidation:
    """Outcome of checking a proposed markup against the type's minimum."""
    is_valid: bool
    minimum_markup: float
    error: Optional[str] = None
    adjusted_markup: Optional[float] = None
