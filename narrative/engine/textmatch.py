from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_since(dt: datetime, now: datetime | None = None) -> float:
    now = as_utc(now or utc_now())
    return (now - as_utc(dt)).total_seconds() / 3600.0


def parse_any_date(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    value = str(value).strip()
    if not value:
        return None
    try:
        if value.endswith("Z"):
            return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        return as_utc(datetime.fromisoformat(value))
    except ValueError:
        try:
            return as_utc(parsedate_to_datetime(value))
        except (TypeError, ValueError):
            return None


def to_iso(dt: datetime | None) -> str | None:
    if not dt:
        return None
    return as_utc(dt).isoformat().replace("+00:00", "Z")


def combined_text(title: str, description: str | None) -> str:
    return f"{title} {description or ''}"


def normalize_title(title: str) -> str:
    lowered = re.sub(r"\s+", " ", title.lower().strip())
    return re.sub(r"[^\w\s]", "", lowered)


def strip_punctuation(text: str) -> str:
    return re.sub(r"[^\w\s]", " ", text.lower().strip())


def whole_word_pattern(phrase: str) -> re.Pattern:
    # (?<!\w)/(?!\w) behave like \b but also hold for phrases ending in punctuation ("u.s.")
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", flags=re.IGNORECASE)


def contains_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)
