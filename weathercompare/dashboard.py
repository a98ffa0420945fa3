"""Weather comparison API: FastAPI backend over the three location slots."""

from datetime import date

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from weathercompare.config.schema import WeatherCompareConfig
from weathercompare.errors import (
    CoverageError,
    ForecastUnavailableError,
    LocationNotFoundError,
    SlotIndexError,
)
from weathercompare.models.location import LocationSlot
from weathercompare.pipeline.location_loader import LocationLoader
from weathercompare.reporting.formatters import grid_to_dict
from weathercompare.reporting.grid import build_grid
from weathercompare.state import AppState


class SlotUpdate(BaseModel):
    query: str


def _slot_json(slot: LocationSlot | None) -> dict | None:
    if slot is None:
        return None
    return {
        "index": slot.index,
        "name": slot.name,
        "lat": slot.location.lat,
        "lon": slot.location.lon,
        "city": slot.city,
        "state": slot.state,
        "timezone": slot.timezone,
        "days": {day: s.to_dict() for day, s in sorted(slot.summaries.items())},
        "alerts": [a.label for a in slot.alerts],
        "fetched_at": slot.fetched_at,
    }


def create_app(
    config: WeatherCompareConfig | None = None,
    loader: LocationLoader | None = None,
    state: AppState | None = None,
) -> FastAPI:
    config = config or WeatherCompareConfig()
    loader = loader or LocationLoader.from_config(config)
    state = state or AppState(config.app.max_locations)

    app = FastAPI(title="Weather Compare", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.slots = state

    # ── Slots ───────────────────────────────────────────────────

    @app.get("/api/slots")
    def get_slots():
        return {"slots": [_slot_json(s) for s in state.slots]}

    @app.put("/api/slots/{index}")
    async def update_slot(index: int, update: SlotUpdate):
        """Resolve a location into a slot, replacing whatever was there."""
        try:
            slot = await loader.update(state, index, update.query)
        except SlotIndexError as e:
            raise HTTPException(404, str(e)) from e
        except LocationNotFoundError as e:
            raise HTTPException(404, str(e)) from e
        except CoverageError as e:
            raise HTTPException(422, str(e)) from e
        except ForecastUnavailableError as e:
            raise HTTPException(502, str(e)) from e
        if slot is None:
            raise HTTPException(409, f"Slot {index} was updated by a newer request")
        return _slot_json(slot)

    @app.delete("/api/slots/{index}")
    def delete_slot(index: int):
        try:
            state.clear(index)
        except SlotIndexError as e:
            raise HTTPException(404, str(e)) from e
        return {"index": index, "cleared": True}

    # ── Grid ────────────────────────────────────────────────────

    @app.get("/api/grid")
    def get_grid(today: str | None = None):
        if today is not None:
            try:
                date.fromisoformat(today)
            except ValueError as e:
                raise HTTPException(422, f"Invalid date: {today}") from e
        grid = build_grid(
            state.slots,
            today=today,
            max_days=config.display.max_days,
            policy=config.display.alert_policy,
        )
        return grid_to_dict(grid)

    @app.get("/api/health")
    def get_health():
        return {"status": "ok", "populated_slots": len(state.populated())}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8777)
