from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from algorithms import DEFAULT_FORMULA, E1RM_FORMULAE
from config import YamlConfig


class SettingsSchema(BaseModel):
    e1rm_formula: str = DEFAULT_FORMULA
    weight_unit: Literal["kg", "lb"] = "lb"
    top_lifts_cap: int = Field(default=20, ge=1)
    rolling_window_days: int = Field(default=365, ge=1)
    streak_min_sessions: int = Field(default=3, ge=1)
    momentum_window_days: int = Field(default=90, ge=1)
    sheet_id: Optional[str] = None
    google_api_key: Optional[str] = None

    @field_validator("e1rm_formula")
    @classmethod
    def known_formula(cls, value: str) -> str:
        if value not in E1RM_FORMULAE:
            raise ValueError(f"unknown e1rm formula: {value}")
        return value


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))


def load_settings(path: str = "settings.yaml") -> SettingsSchema:
    """Return validated settings from ``path``, defaults when it is missing."""
    data = YamlConfig(path).load()
    validate_settings(data)
    return SettingsSchema(**data)


def save_settings(settings: SettingsSchema, path: str = "settings.yaml") -> None:
    YamlConfig(path).save(settings.model_dump())
