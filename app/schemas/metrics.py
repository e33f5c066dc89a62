"""Pydantic schemas for city and district metrics."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentalMetrics(BaseModel):
    """Simulated environmental readings for a district."""

    model_config = ConfigDict(populate_by_name=True)

    air_quality: int = Field(..., alias="airQuality", description="Air quality index")
    noise_level: int = Field(..., alias="noiseLevel", description="Noise level (dB)")
    crowding_level: int = Field(..., alias="crowdingLevel")
    green_space_usage: int = Field(..., alias="greenSpaceUsage")


class SocialMetrics(BaseModel):
    """Social wellbeing scores (0-1). Fields left unset are not touched on update."""

    healthcare_access_score: Optional[float] = None
    education_quality_index: Optional[float] = None
    community_wellbeing: Optional[float] = None


class CityMetricsUpdate(BaseModel):
    """Partial update pushed to the city metrics store."""

    social: Optional[SocialMetrics] = None


class CityMetrics(BaseModel):
    """Current city metrics snapshot."""

    social: SocialMetrics = Field(default_factory=SocialMetrics)
    updates_applied: int = 0
