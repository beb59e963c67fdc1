import unittest
from datetime import datetime, timedelta, timezone

from narrative.engine.sector_classifier import (
    calculate_confidence,
    classify_news_item,
    classify_news_items,
    classify_sentiment,
)
from narrative.models import NewsItem


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _item(title: str, hours_ago: float = 8.0, is_alert: bool = False, description: str | None = None) -> NewsItem:
    return NewsItem(
        id=f"business-{title.lower()[:40]}",
        title=title,
        pub_date=NOW - timedelta(hours=hours_ago),
        category="business",
        description=description,
        is_alert=is_alert,
    )


class SectorClassifierTests(unittest.TestCase):
    def test_negative_wins_over_positive(self):
        out = classify_news_item(_item("Oil prices surge then crash"), NOW)
        self.assertEqual([c.primary_sector for c in out], ["Energy"])
        self.assertEqual(out[0].sentiment, "negative")

    def test_neutral_when_no_sentiment_keyword(self):
        out = classify_news_item(_item("Solar panel installations continue"), NOW)
        self.assertEqual(len(out), 1)
        self.assertEqual(out[0].primary_sector, "Energy")
        self.assertEqual(out[0].sentiment, "neutral")

    def test_no_sector_match_returns_empty(self):
        self.assertEqual(classify_news_item(_item("Local choir wins regional contest"), NOW), [])

    def test_confidence_is_clamped(self):
        self.assertEqual(calculate_confidence(1, 18), 0.3)
        self.assertEqual(calculate_confidence(18, 18), 1.0)
        self.assertEqual(calculate_confidence(0, 0), 0.3)
        self.assertAlmostEqual(calculate_confidence(3, 12), 0.5)

    def test_confidence_from_keyword_ratio(self):
        out = classify_news_item(_item("Steel, copper and mining metal commodity outlook"), NOW)
        self.assertEqual([c.primary_sector for c in out], ["Materials"])
        self.assertAlmostEqual(out[0].confidence, 10 / 13)

    def test_multiple_sectors_share_sentiment_and_impact(self):
        out = classify_news_item(_item("Power grid electricity prices", hours_ago=1), NOW)
        sectors = [c.primary_sector for c in out]
        self.assertEqual(sectors, ["Utilities", "Energy"])
        self.assertAlmostEqual(out[0].confidence, 0.5)
        self.assertAlmostEqual(out[1].confidence, 0.3)
        self.assertEqual({c.sentiment for c in out}, {"neutral"})
        self.assertEqual({c.impact for c in out}, {"medium"})
        self.assertIs(out[0].item, out[1].item)

    def test_hyphenated_keywords_match_after_punctuation_stripping(self):
        out = classify_news_item(_item("E-commerce boom"), NOW)
        self.assertEqual([c.primary_sector for c in out], ["Consumer"])
        self.assertEqual(out[0].sentiment, "positive")
        self.assertEqual(out[0].confidence, 0.3)

    def test_impact_levels(self):
        cases = [
            (_item("Oil tanker docks at terminal", hours_ago=30, is_alert=True), "high"),
            (_item("Major oil tanker docks at terminal", hours_ago=30), "high"),
            (_item("Oil tanker docks at terminal", hours_ago=1), "medium"),
            (_item("Oil tanker docks at terminal", hours_ago=4), "medium"),
            (_item("Oil tanker docks at terminal", hours_ago=8), "low"),
        ]
        for item, expected in cases:
            with self.subTest(title=item.title, age=NOW - item.pub_date):
                out = classify_news_item(item, NOW)
                self.assertEqual(out[0].impact, expected)

    def test_description_contributes_to_matching(self):
        out = classify_news_item(_item("Quarterly update", description="Refinery output steady"), NOW)
        self.assertEqual([c.primary_sector for c in out], ["Energy"])

    def test_batch_flattens_per_item_results(self):
        items = [
            _item("Power grid electricity prices"),
            _item("Local choir wins regional contest"),
            _item("Solar panel installations continue"),
        ]
        out = classify_news_items(items, NOW)
        self.assertEqual([c.primary_sector for c in out], ["Utilities", "Energy", "Energy"])

    def test_sentiment_on_plain_text(self):
        self.assertEqual(classify_sentiment("shares rally on strong profit"), "positive")
        self.assertEqual(classify_sentiment("bank posts loss"), "negative")


if __name__ == "__main__":
    unittest.main()
