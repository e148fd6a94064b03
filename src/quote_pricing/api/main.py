from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware

from quote_pricing import __version__
from quote_pricing.api.schemas import (
    CalcRequest,
    ConsistencyRequest,
    DayTotalRequest,
    FilteredDayTotalRequest,
    MarkupCheckRequest,
)
from quote_pricing.api.state import engine, total_cache

app = FastAPI(
    title="Quote Pricing API",
    description="Markup and pricing engine for travel quotes",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {"status": "online", "message": "Quote Pricing API Active"}


@app.post("/quotes/calculate")
async def calculate_quote(req: CalcRequest):
    try:
        result = engine.calculate(req.quote.to_quote(), req.pricing_options())
        return jsonable_encoder(result)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/total")
async def quote_total(req: CalcRequest):
    try:
        quote = req.quote.to_quote()
        total = total_cache.get_total(quote, req.pricing_options())
        return {
            "quote_id": quote.id,
            "total": total.amount,
            "is_placeholder_total": total.is_placeholder_total,
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/day-total")
async def day_total(req: DayTotalRequest):
    try:
        quote = req.quote.to_quote()
        return {
            "quote_id": quote.id,
            "day_index": req.day_index,
            "total": engine.day_total(quote, req.day_index, options=req.pricing_options()),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/filtered-day-total")
async def filtered_day_total(req: FilteredDayTotalRequest):
    try:
        quote = req.quote.to_quote()
        total = engine.filtered_day_total(quote, req.to_day_items(), req.pricing_options())
        return {"quote_id": quote.id, "total": total}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/itinerary")
async def itinerary(req: CalcRequest):
    try:
        quote = req.quote.to_quote()
        return {"quote_id": quote.id, "days": engine.itinerary(quote, req.pricing_options())}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/display-prices")
async def display_prices(req: CalcRequest):
    try:
        quote = req.quote.to_quote()
        return {"quote_id": quote.id, "prices": engine.display_prices(quote, req.pricing_options())}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/average-markup")
async def average_markup(req: CalcRequest):
    try:
        quote = req.quote.to_quote()
        return {
            "quote_id": quote.id,
            "average_markup": engine.average_markup(quote, req.pricing_options()),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/validate-total")
async def validate_total(req: ConsistencyRequest):
    try:
        result = engine.validate_consistency(req.quote.to_quote(), req.observed_total, req.tolerance)
        return jsonable_encoder(result)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/quotes/hotel-check")
async def hotel_check(req: CalcRequest):
    try:
        return jsonable_encoder(engine.validate_hotel_pricing(req.quote.to_quote()))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/markup/defaults/{item_type}")
async def markup_default(item_type: str):
    return {"item_type": item_type, **jsonable_encoder(engine.markup_for_item_type(item_type))}


@app.post("/markup/validate")
async def validate_markup(req: MarkupCheckRequest):
    try:
        result = engine.validate_markup(req.item_type, req.markup, req.to_markup_type())
        return jsonable_encoder(result)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/cache/invalidate/{quote_id}")
async def invalidate_cache(quote_id: str):
    return {"quote_id": quote_id, "removed": total_cache.invalidate(quote_id)}


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "cached_totals": len(total_cache),
        "cache_hits": total_cache.hits,
        "cache_misses": total_cache.misses,
        "cache_max_size": total_cache.max_size,
        "cache_evictions": total_cache.evictions,
        "consistency_tolerance": engine.settings.consistency_tolerance,
    }
