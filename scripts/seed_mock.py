from __future__ import annotations

import json
import os
import random
import urllib.request
from datetime import datetime, timedelta, timezone

from narrative.engine.textmatch import to_iso
from narrative.services.feed_items import normalize_feed_entries


HEADLINES = {
    "world": [
        "Ukraine reports drone attack on power grid",
        "Iran nuclear talks resume in Vienna",
        "France and Germany agree on defense spending",
        "Japan election campaign enters final week",
        "Brazil floods disrupt copper mining",
        "Egypt sees record Suez Canal traffic",
    ],
    "business": [
        "Oil prices surge after supply shortage",
        "Chip makers rally on cloud computing demand",
        "Central bank holds interest rate steady",
        "Retail sales decline as consumer spending weakens",
        "Steel production recovery boosts factory output",
        "Hospital operator posts record profit",
        "Utility grid upgrade delayed by cable breach",
    ],
}


def mock_entries(now: datetime) -> dict[str, list[dict]]:
    out: dict[str, list[dict]] = {}
    for category, titles in HEADLINES.items():
        rows = []
        for title in titles:
            published = now - timedelta(hours=random.uniform(0.2, 30))
            rows.append(
                {
                    "title": title,
                    "link": "https://example.com/" + title.lower().replace(" ", "-"),
                    "source": random.choice(["reuters.com", "apnews.com", "bbc.co.uk"]),
                    "published": to_iso(published),
                }
            )
        out[category] = rows
    return out


def main() -> None:
    now = datetime.now(timezone.utc)
    items = []
    for category, rows in mock_entries(now).items():
        items.extend(normalize_feed_entries(rows, category, now))

    url = os.getenv("NARRATIVE_URL", "http://localhost:8001").rstrip("/") + "/items"
    body = json.dumps([item.model_dump(mode="json") for item in items]).encode("utf-8")
    req = urllib.request.Request(url, data=body, method="PUT", headers={"Content-Type": "application/json"})
    with urllib.request.urlopen(req, timeout=10) as f:
        print(f.read().decode("utf-8"))


if __name__ == "__main__":
    main()
