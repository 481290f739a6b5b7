from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from algorithms import E1RM_FORMULAE, estimate_e1rm, estimate_weight_for_reps
from config import APP_VERSION
from lift_catalog import lift_profile
from lift_parser import MissingColumnsError, parse_data
from records import mark_historical_prs
from settings_schema import load_settings
from stats_service import LiftDataService


class SheetValues(BaseModel):
    """Spreadsheet values as returned by the Sheets API, headers first."""

    values: List[List[str]]


class JourneysAPI:
    """Provides REST endpoints for lift data analysis.

    Each request parses the sheet it carries; no lift data is kept between
    requests.
    """

    def __init__(self, yaml_path: str = "settings.yaml") -> None:
        self.settings = load_settings(yaml_path)
        self.app = FastAPI(
            title="Strength Journeys API",
            description="Parse lifting spreadsheets and derive personal records",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _setup_routes(self) -> None:
        @self.app.get("/health", summary="Health check")
        def health():
            return {"status": "ok", "version": APP_VERSION}

        @self.app.get("/formulas")
        def formulas():
            return {"formulas": E1RM_FORMULAE, "default": self.settings.e1rm_formula}

        @self.app.get("/e1rm")
        def e1rm(reps: int, weight: float, formula: Optional[str] = None):
            try:
                value = estimate_e1rm(reps, weight, formula or self.settings.e1rm_formula)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {"e1rm": value}

        @self.app.get("/weight_for_reps")
        def weight_for_reps(e1rm: float, reps: int, formula: Optional[str] = None):
            try:
                value = estimate_weight_for_reps(
                    e1rm, reps, formula or self.settings.e1rm_formula
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return {"weight": value}

        @self.app.post("/parse")
        def parse(sheet: SheetValues):
            try:
                entries = parse_data(sheet.values)
            except MissingColumnsError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return mark_historical_prs(entries)

        @self.app.post("/analyze")
        def analyze(sheet: SheetValues):
            service = self._loaded_service(sheet.values)
            snapshot = service.snapshot()
            snapshot["notices"] = service.pending_notices()
            return snapshot

        @self.app.get("/lifts/{lift_type}")
        def lift(lift_type: str):
            return lift_profile(lift_type).model_dump()

        @self.app.post("/lifts/{lift_type}")
        def lift_potential(lift_type: str, sheet: SheetValues):
            profile = lift_profile(lift_type).model_dump()
            service = self._loaded_service(sheet.values)
            profile["potential"] = service.strength_potential(profile["name"])
            return profile

    def _loaded_service(self, rows: List[List[str]]) -> LiftDataService:
        """Return a request-scoped service over ``rows``, 400 if they don't parse."""
        service = LiftDataService(self.settings)
        service.load(rows)
        service.entries()
        if service.parse_error:
            raise HTTPException(status_code=400, detail=service.parse_error)
        return service
