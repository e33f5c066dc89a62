"""City metrics store and the environmental metrics facade."""

import logging

from app.schemas.metrics import CityMetrics, CityMetricsUpdate, EnvironmentalMetrics

logger = logging.getLogger(__name__)


# Simulated readings, identical for every district
ENVIRONMENTAL_METRICS = {
    "airQuality": 250,
    "noiseLevel": 60,
    "crowdingLevel": 68,
    "greenSpaceUsage": 78,
}


class CityMetricsService:
    """Holds the latest city metrics snapshot in memory."""

    def __init__(self) -> None:
        self._metrics = CityMetrics()

    async def update_metrics(self, update: CityMetricsUpdate) -> CityMetrics:
        """Merge a partial update; fields left as None keep their value."""
        if update.social is not None:
            changes = update.social.model_dump(exclude_none=True)
            self._metrics.social = self._metrics.social.model_copy(update=changes)
            logger.info(f"[METRICS] social ← {changes}")
        self._metrics.updates_applied += 1
        return self.get_metrics()

    def get_metrics(self) -> CityMetrics:
        return self._metrics.model_copy(deep=True)

    def get_environmental_metrics(self, district_id: str) -> EnvironmentalMetrics:
        """Mock readings. district_id is not used yet; every district reads the same."""
        return EnvironmentalMetrics(**ENVIRONMENTAL_METRICS)
