"""Investor preference models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PreferencesInput(BaseModel):
    """Complete preferences as submitted at onboarding."""

    capital_range: tuple[int, int] = Field(description="(min, max) capital available in USD")
    target_income: str = Field(description="Target annual income bracket")
    risk_tolerance: str = Field(description="low / medium / high")
    involvement: str = Field(description="Owner involvement: passive, part-time, full-time")
    location: str = Field(default="any", description="Preferred 'City, State'; 'any' for no preference")
    industries: list[str] = Field(default_factory=list)
    business_size: str = Field(default="any")
    payback_period: str = Field(default="any")

    @field_validator("capital_range")
    @classmethod
    def check_capital_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        if value[0] > value[1]:
            raise ValueError("capital_range minimum must not exceed maximum")
        return value


class PreferencesUpdate(BaseModel):
    """Partial patch of an existing preferences record."""

    capital_range: Optional[tuple[int, int]] = None
    target_income: Optional[str] = None
    risk_tolerance: Optional[str] = None
    involvement: Optional[str] = None
    location: Optional[str] = None
    industries: Optional[list[str]] = None
    business_size: Optional[str] = None
    payback_period: Optional[str] = None

    @field_validator("capital_range")
    @classmethod
    def check_capital_range(cls, value: Optional[tuple[int, int]]) -> Optional[tuple[int, int]]:
        if value is not None and value[0] > value[1]:
            raise ValueError("capital_range minimum must not exceed maximum")
        return value


class UserPreferences(PreferencesInput):
    """Stored preferences for one user."""

    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
