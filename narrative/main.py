from __future__ import annotations

import logging
import os
from typing import List

from fastapi import FastAPI

from narrative.config import load_settings
from narrative.engine.gazetteer import load_gazetteer, load_geo_datasets
from narrative.infra.cache import init_cache, now_iso
from narrative.models import (
    CountryMention,
    CountryMentionList,
    CountrySituation,
    MentionsFilters,
    NewsItem,
    SectorScore,
    TimeRange,
)
from narrative.services.narrative_pipeline import NarrativePipeline


settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI()
cache = init_cache(settings.cache_ttl_seconds, settings.cache_maxsize)
pipeline = NarrativePipeline(
    settings,
    load_gazetteer(settings.gazetteer_dir),
    load_geo_datasets(settings.gazetteer_dir),
    cache,
)


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "narrative",
        "version": os.getenv("SERVICE_VERSION") or os.getenv("GIT_SHA") or "dev",
        "tsISO": now_iso(),
        "pipeline": pipeline.stats(),
    }


@app.put("/items")
def replace_items(items: List[NewsItem]):
    kept = pipeline.update_items(items)
    return {"received": len(items), "kept": kept}


@app.get("/mentions", response_model=List[CountryMention])
def country_mentions():
    return pipeline.country_mentions()


@app.get("/sectors", response_model=dict[str, SectorScore])
def sector_scores():
    return pipeline.sector_scores()


@app.get("/alerts", response_model=List[NewsItem])
def alerts():
    return pipeline.alerts()


@app.get("/countries/{name}/situation", response_model=CountrySituation)
def country_situation(name: str):
    return pipeline.country_situation(name)


@app.get("/countries/{name}/mentions", response_model=CountryMentionList)
def country_mention_list(name: str, time_range: TimeRange = "all", category: str = "all", q: str = ""):
    filters = MentionsFilters(time_range=time_range, category=category, search_query=q)
    items = pipeline.mentions_for_country(name, filters)
    return CountryMentionList(country=name, total=pipeline.mention_count(name), items=items)
