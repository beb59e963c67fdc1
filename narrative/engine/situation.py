from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from narrative.engine.gazetteer import Gazetteer, GeoDatasets, normalize_name
from narrative.engine.geo_config import (
    ACTIVITY_HIGH_EVENTS,
    ACTIVITY_HIGH_MENTIONS,
    ACTIVITY_MEDIUM_EVENTS,
    ACTIVITY_MEDIUM_MENTIONS,
    CONFLICT_KEYWORDS,
    HOTSPOT_COUNTRY_MAP,
    INFRASTRUCTURE_COUNTRY_MAP,
    INFRASTRUCTURE_KEYWORDS,
    MAX_RELEVANT_EVENTS,
    SITUATION_LOOKBACK_HOURS,
)
from narrative.engine.mention_extractor import extract_country_mentions, mention_count_for
from narrative.engine.textmatch import (
    as_utc,
    combined_text,
    contains_any,
    normalize_title,
    utc_now,
    whole_word_pattern,
)
from narrative.models import (
    ActivityBreakdown,
    ConflictZone,
    ConflictZoneSignal,
    CountryMention,
    CountrySituation,
    GeographicSignals,
    Hotspot,
    HotspotSignal,
    InfrastructureSignal,
    InfrastructureSite,
    NewsItem,
    RecentActivity,
    RelevantEvent,
)


def local_time_from_longitude(lon: float, now: datetime | None = None) -> str:
    """Approximate wall-clock time at *lon*, one hour per 15 degrees.

    Returns a 12-hour string such as ``"2:45 PM"``.  No timezone database.
    """
    now = as_utc(now or utc_now())
    offset = math.floor(lon / 15.0 + 0.5)
    hours = (now.hour + offset) % 24
    period = "PM" if hours >= 12 else "AM"
    display = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{display}:{now.minute:02d} {period}"


def time_ago(ts: datetime, now: datetime | None = None) -> str:
    now = as_utc(now or utc_now())
    seconds = (now - as_utc(ts)).total_seconds()
    minutes = math.floor(seconds / 60)
    hours = math.floor(seconds / 3600)
    days = math.floor(seconds / 86400)
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"


def activity_level(mention_count: int, recent_events: int) -> str:
    if mention_count >= ACTIVITY_HIGH_MENTIONS or recent_events >= ACTIVITY_HIGH_EVENTS:
        return "high"
    if mention_count >= ACTIVITY_MEDIUM_MENTIONS or recent_events >= ACTIVITY_MEDIUM_EVENTS:
        return "medium"
    return "low"


def event_type(item: NewsItem) -> str:
    if item.is_alert:
        return "alert"
    text = combined_text(item.title, item.description).lower()
    if contains_any(text, CONFLICT_KEYWORDS):
        return "conflict"
    if contains_any(text, INFRASTRUCTURE_KEYWORDS):
        return "infrastructure"
    return "news"


def _name_patterns(country_name: str):
    name = normalize_name(country_name)
    variants = dict.fromkeys([name, name.replace(" ", ""), "-".join(name.split())])
    return [whole_word_pattern(v) for v in variants if v]


def items_mentioning(
    items: Iterable[NewsItem],
    country_name: str,
    lookback_hours: float,
    now: datetime | None = None,
) -> List[NewsItem]:
    now = as_utc(now or utc_now())
    cutoff = now - timedelta(hours=lookback_hours)
    patterns = _name_patterns(country_name)
    out: List[NewsItem] = []
    for item in items:
        if as_utc(item.pub_date) < cutoff:
            continue
        text = combined_text(item.title, item.description)
        if any(p.search(text) for p in patterns):
            out.append(item)
    return out


def recent_activity(items: Sequence[NewsItem], lookback_hours: float) -> RecentActivity:
    counts = {"news": 0, "conflict": 0, "infrastructure": 0, "other": 0}
    for item in items:
        kind = event_type(item)
        counts[kind if kind in counts else "other"] += 1
    return RecentActivity(
        total_events=len(items),
        last_hours=lookback_hours,
        by_type=ActivityBreakdown(**counts),
    )


def relevant_events(
    items: Sequence[NewsItem], now: datetime | None = None, limit: int = MAX_RELEVANT_EVENTS
) -> List[RelevantEvent]:
    ordered = sorted(items, key=lambda i: as_utc(i.pub_date), reverse=True)
    seen: set[str] = set()
    out: List[RelevantEvent] = []
    for item in ordered:
        key = normalize_title(item.title)
        if key in seen:
            continue
        seen.add(key)
        out.append(
            RelevantEvent(
                type=event_type(item),
                title=item.title,
                timestamp=item.pub_date,
                time_ago=time_ago(item.pub_date, now),
                source=item.source or None,
            )
        )
        if len(out) >= limit:
            break
    return out


def _mapped_or_described(name: str, desc: str, country: str, overrides: dict) -> bool:
    mapped = overrides.get(name)
    if mapped:
        return any(normalize_name(c) == country for c in mapped)
    return country in desc.lower()


def hotspot_in_country(hotspot: Hotspot, country_name: str) -> bool:
    return _mapped_or_described(hotspot.name, hotspot.desc, normalize_name(country_name), HOTSPOT_COUNTRY_MAP)


def infrastructure_in_country(site: InfrastructureSite, country_name: str) -> bool:
    return _mapped_or_described(site.name, site.desc, normalize_name(country_name), INFRASTRUCTURE_COUNTRY_MAP)


def conflict_zone_in_country(zone: ConflictZone, country_name: str) -> bool:
    country = normalize_name(country_name)
    zone_name = normalize_name(zone.name)
    if not country or not zone_name:
        return False
    return zone_name == country or country in zone_name or zone_name in country


def geographic_signals(country_name: str, geo: GeoDatasets) -> GeographicSignals:
    infrastructure: List[InfrastructureSignal] = []
    for kind, sites in (
        ("cable", geo.cable_landings),
        ("nuclear", geo.nuclear_sites),
        ("military", geo.military_bases),
    ):
        infrastructure.extend(
            InfrastructureSignal(name=s.name, type=kind) for s in sites if infrastructure_in_country(s, country_name)
        )
    return GeographicSignals(
        hotspots=[
            HotspotSignal(name=h.name, level=h.level) for h in geo.hotspots if hotspot_in_country(h, country_name)
        ],
        conflict_zones=[
            ConflictZoneSignal(name=z.name) for z in geo.conflict_zones if conflict_zone_in_country(z, country_name)
        ],
        infrastructure=infrastructure,
    )


def build_country_situation(
    country_name: str,
    items: Sequence[NewsItem],
    gazetteer: Gazetteer,
    geo: GeoDatasets,
    now: datetime | None = None,
    lookback_hours: float = SITUATION_LOOKBACK_HOURS,
    max_events: int = MAX_RELEVANT_EVENTS,
    mentions: Sequence[CountryMention] | None = None,
) -> CountrySituation:
    """Relevant events come from any item naming the country, even when it has no extracted mentions."""
    now = as_utc(now or utc_now())
    entry = gazetteer.find_entry(country_name)
    lon = entry.lon if entry is not None else 0.0

    recent = items_mentioning(items, country_name, lookback_hours, now)
    activity = recent_activity(recent, lookback_hours)
    if mentions is None:
        mentions = extract_country_mentions(items, gazetteer)
    canonical = entry.name if entry is not None else country_name
    mention_count = mention_count_for(mentions, canonical)

    return CountrySituation(
        country_name=country_name,
        local_time=local_time_from_longitude(lon, now),
        activity_level=activity_level(mention_count, activity.total_events),
        mention_count=mention_count,
        recent_activity=activity,
        relevant_events=relevant_events(recent, now, max_events),
        geographic_signals=geographic_signals(country_name, geo),
    )
