from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from narrative.engine.sector_config import (
    CONFIDENCE_RATIO_SCALE,
    HIGH_IMPACT_KEYWORDS,
    MAX_CONFIDENCE,
    MEDIUM_HOURS,
    MIN_CONFIDENCE,
    NEGATIVE_KEYWORDS,
    POSITIVE_KEYWORDS,
    SECTOR_KEYWORDS,
)
from narrative.engine.textmatch import combined_text, contains_any, hours_since, strip_punctuation
from narrative.models import NewsItem, SectorClassification


def _normalized_keywords(keywords: Iterable[str]) -> List[str]:
    # Keywords go through the same punctuation stripping as the text, so
    # "e-commerce" is searched as "e commerce".
    return [strip_punctuation(k).strip() for k in keywords]


_SECTOR_TERMS: Dict[str, List[str]] = {
    sector: _normalized_keywords(keywords) for sector, keywords in SECTOR_KEYWORDS.items()
}
_POSITIVE_TERMS = _normalized_keywords(POSITIVE_KEYWORDS)
_NEGATIVE_TERMS = _normalized_keywords(NEGATIVE_KEYWORDS)
_HIGH_IMPACT_TERMS = _normalized_keywords(HIGH_IMPACT_KEYWORDS)


def normalize_text(item: NewsItem) -> str:
    return strip_punctuation(combined_text(item.title, item.description))


def calculate_confidence(matches: int, total_keywords: int) -> float:
    if total_keywords <= 0:
        return MIN_CONFIDENCE
    ratio = matches / total_keywords
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, ratio * CONFIDENCE_RATIO_SCALE))


def classify_sectors(text: str) -> List[Tuple[str, float]]:
    matches: List[Tuple[str, float]] = []
    for sector, terms in _SECTOR_TERMS.items():
        hits = sum(1 for k in terms if k in text)
        if hits == 0:
            continue
        matches.append((sector, calculate_confidence(hits, len(terms))))
    matches.sort(key=lambda m: m[1], reverse=True)
    return matches


def classify_sentiment(text: str) -> str:
    if contains_any(text, _NEGATIVE_TERMS):
        return "negative"
    if contains_any(text, _POSITIVE_TERMS):
        return "positive"
    return "neutral"


def classify_impact(item: NewsItem, text: str, now: datetime | None = None) -> str:
    if item.is_alert:
        return "high"
    if contains_any(text, _HIGH_IMPACT_TERMS):
        return "high"
    # Items under 2h without intensity keywords are medium, same as 2-6h.
    if hours_since(item.pub_date, now) < MEDIUM_HOURS:
        return "medium"
    return "low"


def classify_news_item(item: NewsItem, now: datetime | None = None) -> List[SectorClassification]:
    text = normalize_text(item)
    sectors = classify_sectors(text)
    if not sectors:
        return []
    sentiment = classify_sentiment(text)
    impact = classify_impact(item, text, now)
    return [
        SectorClassification(
            primary_sector=sector,
            sentiment=sentiment,
            impact=impact,
            confidence=confidence,
            item=item,
        )
        for sector, confidence in sectors
    ]


def classify_news_items(items: Iterable[NewsItem], now: datetime | None = None) -> List[SectorClassification]:
    out: List[SectorClassification] = []
    for item in items:
        out.extend(classify_news_item(item, now))
    return out
