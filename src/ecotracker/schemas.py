"""Pydantic models describing the persisted JSON mirrors.

The stored documents use the camelCase field names of the browser app's
local-storage format; these schemas convert them to and from the snake_case
domain dataclasses.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .jobs.models import JobApplication, JobStatus
from .models import CarbonData, EnergyData, FoodData, TravelData


class _Mirror(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class TravelSchema(_Mirror):
    mode: Literal["car", "bus", "bike", "walk", "flight"]
    distance: float
    frequency: Literal["daily", "weekly"]


class FoodSchema(_Mirror):
    meat_servings: float = Field(alias="meatServings")
    vegetarian_servings: float = Field(alias="vegetarianServings")
    local_percentage: float = Field(alias="localPercentage")


class EnergySchema(_Mirror):
    electricity_kwh: float = Field(alias="electricityKwh")
    heating_type: Literal["gas", "electric", "none"] = Field(alias="heatingType")
    heating_kwh: float = Field(alias="heatingKwh")
    water_liters: float = Field(alias="waterLiters")


class CarbonDataSchema(_Mirror):
    """Stored form of :class:`~ecotracker.models.CarbonData`."""

    travel: TravelSchema
    food: FoodSchema
    energy: EnergySchema

    @classmethod
    def from_domain(cls, data: CarbonData) -> "CarbonDataSchema":
        return cls(
            travel=TravelSchema(
                mode=data.travel.mode,
                distance=data.travel.distance,
                frequency=data.travel.frequency,
            ),
            food=FoodSchema(
                meat_servings=data.food.meat_servings,
                vegetarian_servings=data.food.vegetarian_servings,
                local_percentage=data.food.local_percentage,
            ),
            energy=EnergySchema(
                electricity_kwh=data.energy.electricity_kwh,
                heating_type=data.energy.heating_type,
                heating_kwh=data.energy.heating_kwh,
                water_liters=data.energy.water_liters,
            ),
        )

    def to_domain(self) -> CarbonData:
        return CarbonData(
            travel=TravelData(**self.travel.model_dump()),
            food=FoodData(**self.food.model_dump()),
            energy=EnergyData(**self.energy.model_dump()),
        )

    def dump_json(self) -> str:
        """Serialise using the camelCase storage keys."""

        return self.model_dump_json(by_alias=True)


class JobApplicationSchema(_Mirror):
    """Stored form of :class:`~ecotracker.jobs.models.JobApplication`.

    ``createdAt``/``updatedAt`` are epoch milliseconds.
    """

    id: str = Field(min_length=1)
    job_title: str = Field(alias="jobTitle")
    company: str
    application_date: date = Field(alias="applicationDate")
    status: JobStatus
    follow_up_date: date | None = Field(default=None, alias="followUpDate")
    notes: str | None = None
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, job: JobApplication) -> "JobApplicationSchema":
        return cls(
            id=job.id,
            job_title=job.job_title,
            company=job.company,
            application_date=job.application_date,
            status=job.status,
            follow_up_date=job.follow_up_date,
            notes=job.notes,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )

    def to_domain(self) -> JobApplication:
        return JobApplication(**self.model_dump())


JOB_LIST_ADAPTER: TypeAdapter[list[JobApplicationSchema]] = TypeAdapter(
    list[JobApplicationSchema]
)


def dump_jobs_json(jobs: list[JobApplication]) -> str:
    """Serialise jobs as the camelCase JSON list used by the store."""

    payload = [JobApplicationSchema.from_domain(job) for job in jobs]
    return JOB_LIST_ADAPTER.dump_json(payload, by_alias=True, exclude_none=True).decode(
        "utf-8"
    )


def load_jobs_json(payload: str) -> list[JobApplication]:
    """Parse and validate a stored job list.

    Raises:
        pydantic.ValidationError: If ``payload`` is not valid JSON or does not
            match the schema.
    """

    return [record.to_domain() for record in JOB_LIST_ADAPTER.validate_json(payload)]
