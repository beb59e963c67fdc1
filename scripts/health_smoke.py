#!/usr/bin/env python3
import json
import os
import sys
import urllib.request

NARRATIVE_URL = os.getenv("NARRATIVE_URL", "http://localhost:8001").rstrip("/")

PIPELINE_KEYS = ["items", "cached_entries", "gazetteer_countries", "last_update"]


def fetch_json(url: str):
    with urllib.request.urlopen(url, timeout=6) as f:
        return json.loads(f.read().decode("utf-8"))


def validate(resp, label: str):
    if not resp.get("ok"):
        raise AssertionError(f"{label}: ok flag not set")
    if not resp.get("tsISO"):
        raise AssertionError(f"{label}: missing tsISO")
    stats = resp.get("pipeline") or {}
    missing = [k for k in PIPELINE_KEYS if k not in stats]
    if missing:
        raise AssertionError(f"{label}: missing pipeline keys in health response: {missing}")
    if not stats.get("gazetteer_countries"):
        raise AssertionError(f"{label}: gazetteer is empty")


def main():
    try:
        health = fetch_json(f"{NARRATIVE_URL}/health")
        validate(health, "narrative")
    except Exception as exc:
        print(f"narrative health check failed: {exc}")
        sys.exit(1)

    try:
        sectors = fetch_json(f"{NARRATIVE_URL}/sectors")
        if len(sectors) != 8:
            raise AssertionError(f"expected 8 sectors, got {len(sectors)}")
    except Exception as exc:
        print(f"sector scores check failed: {exc}")
        sys.exit(1)

    print("health smoke test ok")

if __name__ == "__main__":
    main()
