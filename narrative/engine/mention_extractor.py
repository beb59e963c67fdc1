from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List

from narrative.engine.gazetteer import Gazetteer
from narrative.engine.textmatch import combined_text
from narrative.models import CountryMention, GazetteerEntry, NewsItem


def countries_in_text(text: str, gazetteer: Gazetteer) -> List[GazetteerEntry]:
    """Entries with at least one variant matching *text* as a whole word.

    Each entry appears once, in gazetteer index order, however many of its
    variants matched.
    """
    lowered = text.lower()
    found: Dict[str, GazetteerEntry] = {}
    for _, pattern, entry in gazetteer.patterns:
        if entry.name in found:
            continue
        if pattern.search(lowered):
            found[entry.name] = entry
    return list(found.values())


def countries_in_item(item: NewsItem, gazetteer: Gazetteer) -> List[GazetteerEntry]:
    return countries_in_text(combined_text(item.title, item.description), gazetteer)


def extract_country_mentions(items: Iterable[NewsItem], gazetteer: Gazetteer) -> List[CountryMention]:
    counts: Dict[str, int] = {}
    latest: Dict[str, datetime] = {}
    owners: Dict[str, GazetteerEntry] = {}

    for item in items:
        for entry in countries_in_item(item, gazetteer):
            if entry.name in counts:
                counts[entry.name] += 1
                if item.pub_date > latest[entry.name]:
                    latest[entry.name] = item.pub_date
            else:
                counts[entry.name] = 1
                latest[entry.name] = item.pub_date
                owners[entry.name] = entry

    mentions = [
        CountryMention(
            name=name,
            lat=owners[name].lat,
            lon=owners[name].lon,
            mention_count=count,
            latest_mention=latest[name],
        )
        for name, count in counts.items()
    ]
    mentions.sort(key=lambda m: m.mention_count, reverse=True)
    return mentions


def mention_count_for(mentions: Iterable[CountryMention], country_name: str) -> int:
    target = country_name.lower().strip()
    for mention in mentions:
        if mention.name.lower() == target:
            return mention.mention_count
    return 0
