"""Data structures shared by the scheduler and the optimizer.

Raw records (from a form, an API payload or a CSV row) are validated by the
``parse_*`` functions before they reach the optimizer; the optimizer itself
assumes well-formed input.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eco_scheduler import config


class Band(str, Enum):
    GREEN = "GREEN"
    BLUE = "BLUE"
    ORANGE = "ORANGE"
    RED = "RED"


@dataclass(frozen=True)
class EcoBand:
    """One hour of the eco-band table."""

    hour: int
    band: Band
    price: float  # $/MWh
    credit: float  # $/kWh, positive = reward
    points: float  # eco points per kWh
    description: str = ""


@dataclass(frozen=True)
class Appliance:
    id: str
    name: str
    power_min: float  # W
    power_max: float  # W
    default_runtime: float  # hours
    selected: bool = False
    runtime: Optional[float] = None
    start_time: Optional[int] = None
    flex_hours: Optional[int] = None

    @property
    def average_power(self) -> float:
        return (self.power_min + self.power_max) / 2


@dataclass(frozen=True)
class Preferences:
    prioritize_savings: bool = True
    prioritize_eco_points: bool = False
    avoid_peak_hours: bool = True


@dataclass
class OptimizationResult:
    appliance: str
    original_time: int
    recommended_time: int
    savings: float
    eco_points: int
    reasoning: str
    energy_used: float  # kWh over the full runtime
    feasible: bool = True  # False when no same-day slot existed in the window
    degraded: bool = False  # True when a missing hour was replaced by the default band


@dataclass
class OptimizationSummary:
    total_savings: float
    total_eco_points: int
    total_energy_shifted: float
    carbon_reduction: float
    schedules: list[OptimizationResult] = field(default_factory=list)


# ---------------------------
# BOUNDARY VALIDATION
# ---------------------------

class ApplianceRecord(BaseModel):
    """Raw appliance record as sent by a form or API client (camelCase or snake_case keys)."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    id: str
    name: str
    power_min: float = Field(ge=0, alias="powerMin")
    power_max: float = Field(ge=0, alias="powerMax")
    default_runtime: float = Field(ge=0.5, le=24, alias="defaultRuntime")
    selected: bool = False
    runtime: Optional[float] = Field(default=None, ge=0.5, le=24)
    start_time: Optional[int] = Field(default=None, ge=0, le=23, alias="startTime")
    flex_hours: Optional[int] = Field(default=None, ge=1, le=12, alias="flexHours")


class PreferencesRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prioritize_savings: bool = Field(default=True, alias="prioritizeSavings")
    prioritize_eco_points: bool = Field(default=False, alias="prioritizeEcoPoints")
    avoid_peak_hours: bool = Field(default=True, alias="avoidPeakHours")


def parse_appliance(record: dict) -> Appliance:
    """
    Build an Appliance from a raw record, rejecting out-of-range fields.

    Raises
    ------
    pydantic.ValidationError (a ValueError)
        If a required field is missing, a value is not finite, an hour is not
        a whole number, a flag is not a boolean, or a value is outside its
        allowed range.
    """
    return Appliance(**ApplianceRecord.model_validate(record).model_dump())


def parse_preferences(record: Optional[dict] = None) -> Preferences:
    if not record:
        return Preferences()
    return Preferences(**PreferencesRecord.model_validate(record).model_dump())


def default_band(hour: int) -> EcoBand:
    """Neutral stand-in for an hour the table does not cover."""
    return EcoBand(hour=hour, band=Band(config.DEFAULT_BAND["band"]),
                   price=config.DEFAULT_BAND["price"],
                   credit=config.DEFAULT_BAND["credit"],
                   points=config.DEFAULT_BAND["points"],
                   description=config.DEFAULT_BAND["description"])
