"""Narrative score per sector from classified news.

The score is self-relative: raw signed weight divided by what the same
number of items would weigh if all were high impact, brand new, fully
confident and positive.  One strong negative item can reach -100 while
many neutral items pull the score toward 0.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from narrative.config import Settings
from narrative.engine.sector_config import MEDIUM_HOURS, RECENT_HOURS, SECTOR_ORDER
from narrative.engine.textmatch import as_utc, hours_since, utc_now
from narrative.models import NewsItem, RecencyDecay, ScoringConfig, SectorClassification, SectorScore


DEFAULT_CONFIG = ScoringConfig()

IMPACT_ORDER = {"high": 3, "medium": 2, "low": 1}
SENTIMENT_SIGN = {"positive": 1, "negative": -1, "neutral": 0}


def scoring_config(settings: Settings) -> ScoringConfig:
    return ScoringConfig(
        time_window_hours=settings.time_window_hours,
        impact_multipliers={k: float(v) for k, v in settings.impact_multipliers.items()},
        recency_decay=RecencyDecay(**settings.recency_decay),
        max_top_news=settings.max_top_news,
    )


def recency_decay(item: NewsItem, config: ScoringConfig, now: datetime) -> float:
    age = hours_since(item.pub_date, now)
    if age < RECENT_HOURS:
        return config.recency_decay.recent
    if age < MEDIUM_HOURS:
        return config.recency_decay.medium
    if age < config.time_window_hours:
        return config.recency_decay.old
    return 0.0


def weighted_impact(classification: SectorClassification, config: ScoringConfig, now: datetime) -> float:
    decay = recency_decay(classification.item, config, now)
    if decay == 0:
        return 0.0
    multiplier = config.impact_multipliers.get(classification.impact, 0.0)
    return multiplier * decay * classification.confidence


def filter_by_time_window(
    classifications: Iterable[SectorClassification], config: ScoringConfig, now: datetime
) -> List[SectorClassification]:
    cutoff = as_utc(now) - timedelta(hours=config.time_window_hours)
    return [c for c in classifications if as_utc(c.item.pub_date) >= cutoff]


def raw_score(classifications: Iterable[SectorClassification], config: ScoringConfig, now: datetime) -> float:
    return sum(weighted_impact(c, config, now) * SENTIMENT_SIGN[c.sentiment] for c in classifications)


def max_possible_score(count: int, config: ScoringConfig) -> float:
    max_impact = config.impact_multipliers.get("high", 0.0)
    return count * max_impact * config.recency_decay.recent * 1.0


def normalize_score(raw: float, max_possible: float) -> float:
    if max_possible == 0:
        return 0.0
    return max(-100.0, min(100.0, raw / max_possible * 100.0))


def select_top_news(
    classifications: Iterable[SectorClassification], config: ScoringConfig, now: datetime
) -> List[NewsItem]:
    ranked = sorted(
        classifications,
        key=lambda c: (
            IMPACT_ORDER.get(c.impact, 0),
            recency_decay(c.item, config, now),
            c.confidence,
        ),
        reverse=True,
    )
    seen: set[str] = set()
    out: List[NewsItem] = []
    for c in ranked:
        if c.item.id in seen:
            continue
        seen.add(c.item.id)
        out.append(c.item)
        if len(out) >= config.max_top_news:
            break
    return out


def neutral_score(sector: str, now: datetime | None = None) -> SectorScore:
    return SectorScore(sector=sector, last_update=now or utc_now())


def neutral_scores(now: datetime | None = None) -> Dict[str, SectorScore]:
    now = now or utc_now()
    return {sector: neutral_score(sector, now) for sector in SECTOR_ORDER}


def calculate_sector_score(
    sector: str,
    classifications: Iterable[SectorClassification],
    config: ScoringConfig | None = None,
    now: datetime | None = None,
) -> SectorScore:
    config = config or DEFAULT_CONFIG
    now = now or utc_now()
    in_sector = filter_by_time_window(
        [c for c in classifications if c.primary_sector == sector],
        config,
        now,
    )
    if not in_sector:
        return neutral_score(sector, now)

    raw = raw_score(in_sector, config, now)
    score = normalize_score(raw, max_possible_score(len(in_sector), config))
    return SectorScore(
        sector=sector,
        score=score,
        news_count=len(in_sector),
        positive_count=sum(1 for c in in_sector if c.sentiment == "positive"),
        negative_count=sum(1 for c in in_sector if c.sentiment == "negative"),
        neutral_count=sum(1 for c in in_sector if c.sentiment == "neutral"),
        top_news=select_top_news(in_sector, config, now),
        last_update=now,
    )


def calculate_all_sector_scores(
    classifications: Iterable[SectorClassification],
    config: ScoringConfig | None = None,
    now: datetime | None = None,
) -> Dict[str, SectorScore]:
    pool = list(classifications)
    now = now or utc_now()
    return {sector: calculate_sector_score(sector, pool, config, now) for sector in SECTOR_ORDER}
