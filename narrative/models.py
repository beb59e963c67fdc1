from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from narrative.engine.textmatch import as_utc


Sector = Literal[
    "Technology",
    "Finance",
    "Healthcare",
    "Energy",
    "Consumer",
    "Industrial",
    "Materials",
    "Utilities",
]
Sentiment = Literal["positive", "negative", "neutral"]
ImpactLevel = Literal["low", "medium", "high"]
ActivityLevel = Literal["low", "medium", "high"]
EventType = Literal["news", "conflict", "infrastructure", "alert"]
HotspotLevel = Literal["low", "elevated", "high"]
InfrastructureType = Literal["cable", "nuclear", "military"]
TimeRange = Literal["24h", "7d", "30d", "all"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NewsItem(_Frozen):
    id: str
    title: str
    link: str = ""
    source: str = ""
    pub_date: datetime
    category: str = "world"
    description: str | None = None
    is_alert: bool = False

    @field_validator("pub_date")
    @classmethod
    def _pub_date_utc(cls, value: datetime) -> datetime:
        # naive timestamps are read as UTC
        return as_utc(value)


class GazetteerEntry(_Frozen):
    name: str
    lat: float
    lon: float
    variants: List[str] = Field(default_factory=list)


class Hotspot(_Frozen):
    name: str
    lat: float
    lon: float
    level: HotspotLevel = "low"
    desc: str = ""


class ConflictZone(_Frozen):
    name: str
    bounds: Tuple[Tuple[float, float], Tuple[float, float]]
    coordinates: List[List[float]] | None = None


class InfrastructureSite(_Frozen):
    name: str
    lat: float
    lon: float
    desc: str = ""


class CountryMention(_Frozen):
    name: str
    lat: float
    lon: float
    mention_count: int = Field(ge=1)
    latest_mention: datetime


class SectorClassification(_Frozen):
    primary_sector: Sector
    subsector: str | None = None
    sentiment: Sentiment
    impact: ImpactLevel
    confidence: float = Field(ge=0.3, le=1.0)
    item: NewsItem


class RecencyDecay(_Frozen):
    recent: float = 1.0
    medium: float = 0.8
    old: float = 0.6


class ScoringConfig(_Frozen):
    time_window_hours: float = 12
    impact_multipliers: dict[str, float] = Field(
        default_factory=lambda: {"low": 1.0, "medium": 2.0, "high": 3.0}
    )
    recency_decay: RecencyDecay = Field(default_factory=RecencyDecay)
    max_top_news: int = 10


class SectorScore(_Frozen):
    sector: Sector
    score: float = Field(default=0.0, ge=-100.0, le=100.0)
    news_count: int = 0
    positive_count: int = 0
    negative_count: int = 0
    neutral_count: int = 0
    top_news: List[NewsItem] = Field(default_factory=list)
    last_update: datetime


class RelevantEvent(_Frozen):
    type: EventType
    title: str
    timestamp: datetime
    time_ago: str
    source: str | None = None


class ActivityBreakdown(_Frozen):
    news: int = 0
    conflict: int = 0
    infrastructure: int = 0
    other: int = 0


class RecentActivity(_Frozen):
    total_events: int = 0
    last_hours: float = 24
    by_type: ActivityBreakdown = Field(default_factory=ActivityBreakdown)


class HotspotSignal(_Frozen):
    kind: Literal["hotspot"] = "hotspot"
    name: str
    level: HotspotLevel


class ConflictZoneSignal(_Frozen):
    kind: Literal["conflict_zone"] = "conflict_zone"
    name: str


class InfrastructureSignal(_Frozen):
    kind: Literal["infrastructure"] = "infrastructure"
    name: str
    type: InfrastructureType


class GeographicSignals(_Frozen):
    hotspots: List[HotspotSignal] = Field(default_factory=list)
    conflict_zones: List[ConflictZoneSignal] = Field(default_factory=list)
    infrastructure: List[InfrastructureSignal] = Field(default_factory=list)


class CountrySituation(_Frozen):
    country_name: str
    local_time: str
    activity_level: ActivityLevel
    mention_count: int = 0
    recent_activity: RecentActivity
    relevant_events: List[RelevantEvent] = Field(default_factory=list)
    geographic_signals: GeographicSignals = Field(default_factory=GeographicSignals)


class MentionsFilters(_Frozen):
    time_range: TimeRange = "all"
    category: str = "all"
    search_query: str = ""


class CountryMentionList(_Frozen):
    country: str
    total: int = 0
    items: List[NewsItem] = Field(default_factory=list)
