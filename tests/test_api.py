import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from narrative.main import app, pipeline


def _payload(title: str, minutes_ago: int, category: str = "world") -> dict:
    published = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
    return {
        "id": f"{category}-{title.lower().replace(' ', '-')}",
        "title": title,
        "link": "https://example.com/" + title.lower().replace(" ", "-"),
        "source": "example.com",
        "pub_date": published.isoformat(),
        "category": category,
    }


class ApiTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)
        resp = self.client.put(
            "/items",
            json=[
                _payload("France oil refinery expansion", 30, category="business"),
                _payload("France oil refinery expansion!", 40, category="business"),
                _payload("Germany coalition talks", 90),
                _payload("Paris hosts summit", 600),
            ],
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"received": 4, "kept": 3})

    def tearDown(self):
        pipeline.update_items([])

    def test_health(self):
        body = self.client.get("/health").json()
        self.assertTrue(body["ok"])
        self.assertIn("tsISO", body)
        self.assertEqual(body["pipeline"]["items"], 3)

    def test_mentions(self):
        body = self.client.get("/mentions").json()
        self.assertEqual([(m["name"], m["mention_count"]) for m in body], [("France", 2), ("Germany", 1)])

    def test_sectors(self):
        body = self.client.get("/sectors").json()
        self.assertEqual(len(body), 8)
        self.assertEqual(body["Energy"]["news_count"], 1)
        self.assertGreater(body["Energy"]["score"], 0)

    def test_alerts(self):
        body = self.client.get("/alerts").json()
        self.assertEqual([a["title"] for a in body], ["France oil refinery expansion", "Germany coalition talks"])
        self.assertTrue(all(a["is_alert"] for a in body))

    def test_country_situation(self):
        body = self.client.get("/countries/France/situation").json()
        self.assertEqual(body["country_name"], "France")
        self.assertEqual(body["mention_count"], 2)
        self.assertEqual(body["recent_activity"]["total_events"], 1)
        self.assertIn("English Channel", [h["name"] for h in body["geographic_signals"]["hotspots"]])

    def test_country_mentions_with_filters(self):
        body = self.client.get("/countries/France/mentions").json()
        self.assertEqual(body["total"], 2)
        self.assertEqual(len(body["items"]), 2)

        body = self.client.get("/countries/France/mentions", params={"category": "business", "q": "refinery"}).json()
        self.assertEqual([i["title"] for i in body["items"]], ["France oil refinery expansion"])

    def test_mixed_timestamp_formats(self):
        resp = self.client.put(
            "/items",
            json=[
                {"id": "world-a", "title": "France signs new trade deal", "pub_date": "2025-01-01T10:00:00Z"},
                {"id": "world-b", "title": "France and Germany meet", "pub_date": "2025-01-01T11:00:00"},
            ],
        )
        self.assertEqual(resp.status_code, 200)
        resp = self.client.get("/mentions")
        self.assertEqual(resp.status_code, 200)
        france = next(m for m in resp.json() if m["name"] == "France")
        self.assertEqual(france["mention_count"], 2)
        self.assertEqual(self.client.get("/countries/France/situation").status_code, 200)

    def test_invalid_time_range_rejected(self):
        resp = self.client.get("/countries/France/mentions", params={"time_range": "1y"})
        self.assertEqual(resp.status_code, 422)

    def test_invalid_item_rejected(self):
        resp = self.client.put("/items", json=[{"title": "missing fields"}])
        self.assertEqual(resp.status_code, 422)


if __name__ == "__main__":
    unittest.main()
