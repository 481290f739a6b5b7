import requests
from typing import Optional


class JourneysClient:
    """Simple REST client for the lift data API."""

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        self.base_url = base_url.rstrip("/")

    def analyze(self, values: list[list[str]]) -> dict:
        resp = requests.post(f"{self.base_url}/analyze", json={"values": values})
        resp.raise_for_status()
        return resp.json()

    def parse(self, values: list[list[str]]) -> list[dict]:
        resp = requests.post(f"{self.base_url}/parse", json={"values": values})
        resp.raise_for_status()
        return resp.json()

    def estimate_e1rm(self, reps: int, weight: float, formula: Optional[str] = None) -> float:
        params = {"reps": reps, "weight": weight}
        if formula:
            params["formula"] = formula
        resp = requests.get(f"{self.base_url}/e1rm", params=params)
        resp.raise_for_status()
        return resp.json()["e1rm"]
