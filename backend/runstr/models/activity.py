"""
Activity and Activity Summary models.
"""
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from runstr.models.measurement import MeasurementSet


class Activity(BaseModel):
    """One activity to be summarized: a timestamp plus its measurements."""
    timestamp: Optional[datetime] = None
    rawContent: Optional[str] = None
    extractedData: MeasurementSet = Field(default_factory=MeasurementSet)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def timestamp_ms(self) -> Optional[float]:
        """Timestamp as epoch milliseconds."""
        if self.timestamp is None:
            return None
        return self.timestamp.timestamp() * 1000


class Period(BaseModel):
    """Earliest and latest timestamp among the activities."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class Totals(BaseModel):
    distance: float = 0.0
    distanceFormatted: str = "0.00 km"
    duration: float = 0
    durationFormatted: str = "00:00:00"


class Averages(BaseModel):
    distance: float = 0.0
    distanceFormatted: str = "0.00 km"
    duration: float = 0.0
    durationFormatted: str = "00:00:00"
    pace: float = 0.0
    paceFormatted: str = "0:00/km"


class BestEffort(BaseModel):
    """Points at the activity holding a best value."""
    activityIndex: int
    value: str


class Bests(BaseModel):
    pace: Optional[BestEffort] = None
    distance: Optional[BestEffort] = None
    duration: Optional[BestEffort] = None


class Trend(BaseModel):
    """Pace trend classification."""
    improving: bool = False
    consistent: bool = False


class ActivitySummary(BaseModel):
    """Statistics over a list of activities."""
    totalActivities: int
    period: Period = Field(default_factory=Period)
    totals: Totals = Field(default_factory=Totals)
    averages: Averages = Field(default_factory=Averages)
    best: Bests = Field(default_factory=Bests)
    trend: Trend = Field(default_factory=Trend)
    activityTypes: Dict[str, int] = Field(default_factory=dict)
