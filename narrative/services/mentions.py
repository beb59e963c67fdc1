from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List

from narrative.engine.gazetteer import Gazetteer, normalize_name
from narrative.engine.mention_extractor import countries_in_item
from narrative.engine.textmatch import as_utc, combined_text, utc_now
from narrative.infra.cache import NarrativeCache, cache_key
from narrative.models import MentionsFilters, NewsItem


TIME_RANGE_HOURS = {"24h": 24, "7d": 7 * 24, "30d": 30 * 24}

MENTIONS_CACHE_PREFIX = "mentions"


def is_country_mentioned(item: NewsItem, country_name: str, gazetteer: Gazetteer) -> bool:
    target = normalize_name(country_name)
    entry = gazetteer.find_entry(country_name)
    if entry is not None:
        target = normalize_name(entry.name)
    return any(normalize_name(e.name) == target for e in countries_in_item(item, gazetteer))


def apply_time_filter(items: Iterable[NewsItem], time_range: str, now: datetime | None = None) -> List[NewsItem]:
    hours = TIME_RANGE_HOURS.get(time_range)
    if hours is None:
        return list(items)
    cutoff = as_utc(now or utc_now()) - timedelta(hours=hours)
    return [i for i in items if as_utc(i.pub_date) >= cutoff]


def apply_category_filter(items: Iterable[NewsItem], category: str) -> List[NewsItem]:
    if not category or category == "all":
        return list(items)
    return [i for i in items if i.category == category]


def apply_search_filter(items: Iterable[NewsItem], query: str) -> List[NewsItem]:
    query = (query or "").lower().strip()
    if not query:
        return list(items)
    return [i for i in items if query in combined_text(i.title, i.description).lower()]


def _country_matches(
    items: Iterable[NewsItem],
    country_name: str,
    gazetteer: Gazetteer,
    category: str,
    cache: NarrativeCache | None,
) -> List[NewsItem]:
    # Cached part is time independent: country match + category, newest first.
    key = cache_key(MENTIONS_CACHE_PREFIX, normalize_name(country_name), category or "all")
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return list(cached)
    matched = [i for i in items if is_country_mentioned(i, country_name, gazetteer)]
    matched = apply_category_filter(matched, category)
    matched.sort(key=lambda i: as_utc(i.pub_date), reverse=True)
    if cache is not None:
        cache.set(key, tuple(matched))
    return matched


def get_mentions_for_country(
    items: Iterable[NewsItem],
    country_name: str,
    gazetteer: Gazetteer,
    filters: MentionsFilters | None = None,
    cache: NarrativeCache | None = None,
    now: datetime | None = None,
) -> List[NewsItem]:
    filters = filters or MentionsFilters()
    mentions = _country_matches(items, country_name, gazetteer, filters.category, cache)
    mentions = apply_time_filter(mentions, filters.time_range, now)
    return apply_search_filter(mentions, filters.search_query)


def get_mention_count_for_country(items: Iterable[NewsItem], country_name: str, gazetteer: Gazetteer) -> int:
    return sum(1 for i in items if is_country_mentioned(i, country_name, gazetteer))
