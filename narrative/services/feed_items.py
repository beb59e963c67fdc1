from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, List

from narrative.engine.textmatch import as_utc, hours_since, normalize_title, parse_any_date, utc_now
from narrative.models import NewsItem


logger = logging.getLogger("feed_items")

ALERT_KEYWORDS = [
    "alert",
    "breaking",
    "crisis",
    "conflict",
    "emergency",
    "urgent",
    "critical",
    "attack",
    "strike",
    "sanctions",
    "war",
    "military action",
]

ALERT_RECENT_HOURS = 2
ALERT_LIMIT = 20
ITEM_ID_TITLE_CHARS = 50


def build_item_id(title: str, category: str) -> str:
    slug = re.sub(r"\s+", "-", title.lower().strip())
    return f"{category}-{slug[:ITEM_ID_TITLE_CHARS]}"


def dedupe_items(items: Iterable[NewsItem]) -> List[NewsItem]:
    seen: set[str] = set()
    unique: List[NewsItem] = []
    total = 0
    for item in items:
        total += 1
        key = normalize_title(item.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    dropped = total - len(unique)
    if dropped:
        logger.info("title dedup removed %d items (%d -> %d)", dropped, total, len(unique))
    return unique


def is_alert_item(item: NewsItem, now: datetime | None = None) -> bool:
    title = item.title.lower()
    if any(k in title for k in ALERT_KEYWORDS):
        return True
    return hours_since(item.pub_date, now) < ALERT_RECENT_HOURS


def derive_alerts(items: Iterable[NewsItem], now: datetime | None = None, limit: int = ALERT_LIMIT) -> List[NewsItem]:
    alerts = [item.model_copy(update={"is_alert": True}) for item in items if is_alert_item(item, now)]
    alerts.sort(key=lambda i: as_utc(i.pub_date), reverse=True)
    return alerts[:limit]


def normalize_feed_entries(raw: Iterable[dict], category: str, now: datetime | None = None) -> List[NewsItem]:
    """Turn raw feed entry dicts into NewsItems.

    Accepts the shape produced by common RSS parsers: ``title``,
    ``link``/``url``, ``source``, ``published``, ``summary``/``description``.
    """
    now = as_utc(now or utc_now())
    out: List[NewsItem] = []
    for entry in raw:
        title = str(entry.get("title") or "").strip()
        if not title:
            continue
        published = parse_any_date(entry.get("published") or entry.get("pubDate"))
        if published is None:
            logger.debug("no parseable date for %r, using now", title[:60])
            published = now
        description = entry.get("description") or entry.get("summary") or None
        out.append(
            NewsItem(
                id=build_item_id(title, category),
                title=title,
                link=str(entry.get("link") or entry.get("url") or ""),
                source=str(entry.get("source") or ""),
                pub_date=published,
                category=category,
                description=str(description) if description else None,
                is_alert=bool(entry.get("is_alert", False)),
            )
        )
    return out
