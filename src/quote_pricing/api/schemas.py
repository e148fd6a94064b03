"""
Request models for the pricing API.

Field names follow the stored quote records; every pricing field is optional
because ingestion supplies the defaults.
"""
from typing import List, Optional, Union

from pydantic import BaseModel

from ..engine.ingest import (
    line_items_from_records,
    parse_markup_strategy,
    parse_markup_type,
    quote_from_record,
)
from ..engine.models import LineItem, MarkupType, PricingOptions, Quote


class LineItemIn(BaseModel):
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    item_type: Optional[str] = None
    cost: Optional[float] = None
    quantity: Optional[int] = None
    markup: Optional[float] = None
    markup_type: Optional[str] = None
    day_index: Optional[int] = None
    span_days: Optional[int] = None
    nights: Optional[int] = None
    number_of_nights: Optional[int] = None
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    original_span_days: Optional[int] = None


class QuoteIn(BaseModel):
    id: Union[str, int] = ""
    markup: float = 0.0
    discount: float = 0.0
    markup_strategy: Optional[str] = None
    items: List[LineItemIn] = []

    def to_quote(self) -> Quote:
        return quote_from_record(self.model_dump())


class OptionsIn(BaseModel):
    include_discount: bool = True
    include_quantity: bool = True
    markup_strategy: Optional[str] = None

    def to_options(self) -> PricingOptions:
        return PricingOptions(
            include_discount=self.include_discount,
            include_quantity=self.include_quantity,
            markup_strategy=parse_markup_strategy(self.markup_strategy),
        )


class CalcRequest(BaseModel):
    quote: QuoteIn
    options: Optional[OptionsIn] = None

    def pricing_options(self) -> PricingOptions:
        return self.options.to_options() if self.options else PricingOptions()


class DayTotalRequest(CalcRequest):
    day_index: int


class FilteredDayTotalRequest(CalcRequest):
    day_items: List[LineItemIn]

    def to_day_items(self) -> tuple[LineItem, ...]:
        return line_items_from_records(i.model_dump() for i in self.day_items)


class ConsistencyRequest(CalcRequest):
    observed_total: float
    tolerance: Optional[float] = None


class MarkupCheckRequest(BaseModel):
    item_type: str
    markup: float
    markup_type: Optional[str] = None

    def to_markup_type(self) -> MarkupType:
        return parse_markup_type(self.markup_type)
