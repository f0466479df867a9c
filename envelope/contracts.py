"""Pydantic contracts for aircraft performance inputs."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class AircraftPerformanceConfig(BaseModel):
    """Static performance data for one aircraft type."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    name: str = Field("", description="Display name")
    cruise_speed_kt: float = Field(..., gt=0, description="True airspeed at cruise")
    fuel_flow_gph: float = Field(..., gt=0, description="Cruise fuel flow in gallons per hour")
    fuel_capacity_gal: float = Field(..., gt=0, description="Total tank capacity")
    usable_fuel_gal: float = Field(..., gt=0, description="Usable fuel, never above capacity")
    max_takeoff_weight_lbs: float = Field(..., gt=0, description="Maximum takeoff weight (MTOW)")
    max_useful_load_lbs: float = Field(..., gt=0, description="Fuel + people + bags allowance")
    fuel_weight_per_gallon_lbs: float = Field(..., gt=0, description="6.0 for 100LL, 6.7 for Jet-A")
    avg_person_weight_lbs: float = Field(..., gt=0)
    avg_bag_weight_lbs: float = Field(..., gt=0)
    taxi_fuel_gal: float = Field(0.0, ge=0)
    contingency_fuel_min_gal: float = Field(0.0, ge=0, description="Contingency floor")
    reserve_fuel_gal: float = Field(0.0, ge=0, description="Legal reserve")
    max_passengers: int = Field(..., ge=1, description="Seats including the pilot")
    max_bags: int = Field(..., ge=0)
    empty_weight_lbs: Optional[float] = Field(
        None,
        gt=0,
        description="Basic empty weight; enables the MTOW check when provided.",
    )
    contingency_fraction: float = Field(
        0.0,
        ge=0,
        le=1,
        description="Share of cruise fuel carried as contingency when above the floor.",
    )
    payload_range_constant: Optional[float] = Field(
        None,
        gt=0,
        description="Rule of thumb: payload (lbs) + range (nm) stays below this value.",
    )

    @field_validator("usable_fuel_gal")
    @classmethod
    def validate_usable_fuel(cls, usable: float, info: ValidationInfo):  # type: ignore[override]
        capacity = info.data.get("fuel_capacity_gal")
        if capacity is not None and usable > capacity:
            raise ValueError("usable_fuel_gal must be less than or equal to fuel_capacity_gal")
        return usable

    @field_validator("empty_weight_lbs")
    @classmethod
    def validate_empty_weight(cls, empty: Optional[float], info: ValidationInfo):  # type: ignore[override]
        mtow = info.data.get("max_takeoff_weight_lbs")
        if empty is not None and mtow is not None and empty >= mtow:
            raise ValueError("empty_weight_lbs must be below max_takeoff_weight_lbs")
        return empty

    @property
    def fixed_reserve_fuel_gal(self) -> float:
        """Taxi, contingency floor and reserve: fuel never available for cruise."""

        return self.taxi_fuel_gal + self.contingency_fuel_min_gal + self.reserve_fuel_gal


class PayloadRequest(BaseModel):
    """People and bags requested for a flight."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    passengers: int = Field(..., ge=1, description="Occupants including the pilot")
    bags: int = Field(0, ge=0)

    def weight_lbs(self, config: AircraftPerformanceConfig) -> float:
        return self.passengers * config.avg_person_weight_lbs + self.bags * config.avg_bag_weight_lbs

    def within_limits(self, config: AircraftPerformanceConfig) -> bool:
        return self.passengers <= config.max_passengers and self.bags <= config.max_bags
