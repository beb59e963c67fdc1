import unittest
from datetime import datetime, timedelta, timezone

from narrative.engine.gazetteer import Gazetteer
from narrative.engine.mention_extractor import countries_in_text, extract_country_mentions, mention_count_for
from narrative.models import GazetteerEntry, NewsItem


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def _item(title: str, hours_ago: float = 1.0, description: str | None = None) -> NewsItem:
    return NewsItem(
        id=f"world-{title.lower().replace(' ', '-')[:50]}",
        title=title,
        source="example.com",
        pub_date=NOW - timedelta(hours=hours_ago),
        description=description,
    )


def _gazetteer() -> Gazetteer:
    return Gazetteer(
        [
            GazetteerEntry(name="France", lat=48.0, lon=2.0, variants=["France", "French", "Paris"]),
            GazetteerEntry(name="Germany", lat=51.0, lon=9.0, variants=["Germany", "German"]),
            GazetteerEntry(name="Chad", lat=15.5, lon=18.7, variants=["Chad"]),
            GazetteerEntry(name="United States", lat=39.8, lon=-98.6, variants=["United States", "U.S."]),
        ]
    )


class MentionExtractorTests(unittest.TestCase):
    def test_mention_counts_and_latest_timestamp(self):
        items = [
            _item("France signs new trade deal", hours_ago=2),
            _item("France and Germany meet", hours_ago=5),
        ]
        mentions = extract_country_mentions(items, _gazetteer())
        by_name = {m.name: m for m in mentions}
        self.assertEqual(by_name["France"].mention_count, 2)
        self.assertEqual(by_name["Germany"].mention_count, 1)
        self.assertEqual(by_name["France"].latest_mention, NOW - timedelta(hours=2))
        self.assertEqual((by_name["France"].lat, by_name["France"].lon), (48.0, 2.0))
        self.assertEqual(mentions[0].name, "France")

    def test_whole_word_matching(self):
        gaz = _gazetteer()
        self.assertEqual(countries_in_text("I bought a chadwick jacket", gaz), [])
        found = countries_in_text("Chad announced new policy", gaz)
        self.assertEqual([e.name for e in found], ["Chad"])

    def test_case_insensitive_and_punctuated_variant(self):
        found = countries_in_text("U.S. economy adds jobs", _gazetteer())
        self.assertEqual([e.name for e in found], ["United States"])
        found = countries_in_text("GERMANY votes", _gazetteer())
        self.assertEqual([e.name for e in found], ["Germany"])

    def test_two_variants_same_item_count_once(self):
        items = [_item("Paris talks: French officials host summit")]
        mentions = extract_country_mentions(items, _gazetteer())
        self.assertEqual(len(mentions), 1)
        self.assertEqual(mentions[0].mention_count, 1)

    def test_description_is_searched_and_optional(self):
        items = [
            _item("Summit opens", description="Leaders arrive in Berlin from Germany"),
            _item("Summit closes"),
        ]
        mentions = extract_country_mentions(items, _gazetteer())
        self.assertEqual([(m.name, m.mention_count) for m in mentions], [("Germany", 1)])

    def test_unmatched_entities_are_omitted(self):
        mentions = extract_country_mentions([_item("Quiet day on markets")], _gazetteer())
        self.assertEqual(mentions, [])
        self.assertEqual(extract_country_mentions([], _gazetteer()), [])

    def test_sorted_by_count_descending(self):
        items = [
            _item("Germany budget vote"),
            _item("German exports slow"),
            _item("France and Germany sign accord"),
            _item("Chad elections"),
            _item("Germany storm"),
        ]
        mentions = extract_country_mentions(items, _gazetteer())
        counts = [m.mention_count for m in mentions]
        self.assertEqual(counts, sorted(counts, reverse=True))
        self.assertEqual(mentions[0].name, "Germany")
        self.assertEqual(mentions[0].mention_count, 4)

    def test_extraction_is_idempotent(self):
        items = [
            _item("France signs new trade deal", hours_ago=2),
            _item("France and Germany meet", hours_ago=5),
            _item("Chad border reopens", hours_ago=7),
        ]
        first = extract_country_mentions(items, _gazetteer())
        second = extract_country_mentions(items, _gazetteer())
        self.assertEqual(first, second)

    def test_naive_and_aware_timestamps_mix(self):
        items = [
            NewsItem(id="a", title="France signs new trade deal", pub_date=datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)),
            NewsItem(id="b", title="France and Germany meet", pub_date=datetime(2025, 1, 1, 11, 0)),
        ]
        by_name = {m.name: m for m in extract_country_mentions(items, _gazetteer())}
        self.assertEqual(by_name["France"].mention_count, 2)
        self.assertEqual(by_name["France"].latest_mention, datetime(2025, 1, 1, 11, 0, tzinfo=timezone.utc))
        self.assertIsNotNone(by_name["Germany"].latest_mention.tzinfo)

    def test_mention_count_for_lookup(self):
        mentions = extract_country_mentions([_item("France wins"), _item("France loses")], _gazetteer())
        self.assertEqual(mention_count_for(mentions, "france"), 2)
        self.assertEqual(mention_count_for(mentions, "Germany"), 0)


if __name__ == "__main__":
    unittest.main()
