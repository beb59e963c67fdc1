from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List

from narrative.config import Settings
from narrative.engine.gazetteer import Gazetteer, GeoDatasets
from narrative.engine.mention_extractor import extract_country_mentions
from narrative.engine.sector_classifier import classify_news_items
from narrative.engine.sector_scoring import calculate_all_sector_scores, neutral_scores, scoring_config
from narrative.engine.situation import build_country_situation
from narrative.infra.cache import NarrativeCache, cache_key, now_iso
from narrative.models import (
    CountryMention,
    CountrySituation,
    MentionsFilters,
    NewsItem,
    SectorClassification,
    SectorScore,
)
from narrative.services.feed_items import dedupe_items, derive_alerts
from narrative.services.mentions import MENTIONS_CACHE_PREFIX, get_mention_count_for_country, get_mentions_for_country


logger = logging.getLogger("narrative_pipeline")

COUNTRY_MENTIONS_KEY = "country_mentions"


class NarrativePipeline:
    """Owns the current news pool and recomputes derived views from it.

    Only results that do not depend on wall-clock time are cached, and
    every cache entry is dropped when the pool is replaced.
    """

    def __init__(self, settings: Settings, gazetteer: Gazetteer, geo: GeoDatasets, cache: NarrativeCache):
        self.settings = settings
        self.gazetteer = gazetteer
        self.geo = geo
        self.cache = cache
        self.scoring = scoring_config(settings)
        self.items: List[NewsItem] = []
        self.last_update: str | None = None

    def update_items(self, items: Iterable[NewsItem]) -> int:
        self.items = dedupe_items(items)
        self.invalidate()
        self.last_update = now_iso()
        logger.info("news pool replaced: %d items", len(self.items))
        return len(self.items)

    def invalidate(self) -> None:
        self.cache.invalidate(COUNTRY_MENTIONS_KEY)
        self.cache.invalidate(MENTIONS_CACHE_PREFIX)

    def stats(self) -> dict:
        return {
            "items": len(self.items),
            "cached_entries": len(self.cache),
            "gazetteer_countries": len(self.gazetteer),
            "last_update": self.last_update,
        }

    def country_mentions(self) -> List[CountryMention]:
        key = cache_key(COUNTRY_MENTIONS_KEY)
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)
        mentions = extract_country_mentions(self.items, self.gazetteer)
        self.cache.set(key, tuple(mentions))
        return mentions

    def classifications(self, now: datetime | None = None) -> List[SectorClassification]:
        return classify_news_items(self.items, now)

    def sector_scores(self, now: datetime | None = None) -> Dict[str, SectorScore]:
        if not self.items:
            return neutral_scores(now)
        return calculate_all_sector_scores(self.classifications(now), self.scoring, now)

    def alerts(self, now: datetime | None = None) -> List[NewsItem]:
        return derive_alerts(self.items, now, self.settings.alert_limit)

    def country_situation(self, country_name: str, now: datetime | None = None) -> CountrySituation:
        return build_country_situation(
            country_name,
            self.items,
            self.gazetteer,
            self.geo,
            now=now,
            lookback_hours=self.settings.situation_lookback_hours,
            max_events=self.settings.max_relevant_events,
            mentions=self.country_mentions(),
        )

    def mentions_for_country(
        self, country_name: str, filters: MentionsFilters | None = None, now: datetime | None = None
    ) -> List[NewsItem]:
        return get_mentions_for_country(self.items, country_name, self.gazetteer, filters, self.cache, now)

    def mention_count(self, country_name: str) -> int:
        return get_mention_count_for_country(self.items, country_name, self.gazetteer)
