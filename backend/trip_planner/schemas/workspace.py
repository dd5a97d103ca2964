import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from trip_planner.schemas.base import CamelModel


class WifiQuality(str, Enum):
    """Selectable minimum connectivity tiers, lowest first."""
    MODERATE = "moderate"
    GOOD = "good"
    EXCELLENT = "excellent"


class NoiseLevel(str, Enum):
    SILENT = "silent"
    QUIET = "quiet"
    MODERATE = "moderate"
    LIVELY = "lively"


class Workspace(CamelModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID
    name: str
    city: str
    country: str
    region: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    wifi_speed_mbps: Optional[float] = None
    # Stored as free text; values outside WifiQuality (e.g. "poor") never satisfy a tier filter.
    wifi_quality: Optional[str] = None
    has_power_outlets: Optional[bool] = None
    power_outlet_count: Optional[str] = None
    noise_level: Optional[str] = None
    has_quiet_zones: Optional[bool] = None
    hours_open: Optional[str] = None
    hours_close: Optional[str] = None
    open_24_hours: Optional[bool] = None
    amenities: List[str] = Field(default_factory=list)
    average_rating: Optional[float] = None
    review_count: Optional[int] = None
    website_url: Optional[str] = None
    image_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("amenities", mode="before")
    @classmethod
    def null_amenities(cls, value):
        return value or []

    @property
    def hours_label(self) -> str:
        if self.open_24_hours:
            return "24/7"
        if self.hours_open and self.hours_close:
            return f"{self.hours_open} - {self.hours_close}"
        return "Hours vary"


class WorkspaceFilters(CamelModel):
    """
    Active directory filters. None (or False for the boolean flags) leaves an axis unfiltered.
    """
    search: str = ""
    wifi_quality: Optional[WifiQuality] = None
    noise_level: Optional[NoiseLevel] = None
    has_power_outlets: Optional[bool] = None
    has_quiet_zones: Optional[bool] = None
    country: Optional[str] = None

    @property
    def active_count(self) -> int:
        return sum(
            1 for value in (
                self.wifi_quality, self.noise_level, self.has_power_outlets,
                self.has_quiet_zones, self.country,
            ) if value
        )


class CountryGroup(CamelModel):
    country: str
    workspaces: List[Workspace]


class WorkspaceDirectory(CamelModel):
    total: int
    active_filters: int
    groups: List[CountryGroup]

    @classmethod
    def from_groups(cls, groups: Dict[str, List[Workspace]], active_filters: int = 0) -> "WorkspaceDirectory":
        return cls(
            total=sum(len(spaces) for spaces in groups.values()),
            active_filters=active_filters,
            groups=[CountryGroup(country=country, workspaces=spaces) for country, spaces in groups.items()],
        )


class WorkspaceReviewCreate(CamelModel):
    rating: int = Field(ge=1, le=5)
    wifi_rating: Optional[int] = Field(default=None, ge=1, le=5)
    noise_rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None


class WorkspaceReview(WorkspaceReviewCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    workspace_id: uuid.UUID
    user_id: str
    created_at: datetime


class WorkspaceSuggestionCreate(CamelModel):
    name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    country: str = Field(min_length=1)
    address: Optional[str] = None
    description: Optional[str] = None
    wifi_speed_estimate: Optional[str] = None
    noise_level_estimate: Optional[str] = None
    has_power_outlets: bool = False

    @field_validator("name", "city", "country")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please fill in name, city, and country.")
        return value

    @field_validator("address", "description", "wifi_speed_estimate", "noise_level_estimate")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class WorkspaceSuggestion(WorkspaceSuggestionCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[str] = None
    status: str
    created_at: datetime
