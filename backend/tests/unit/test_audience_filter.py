"""
Unit tests for notifications/audience_filter.py

Tests the compiled token order and the OR/AND targeting semantics of the
resulting filter list.
"""

import unittest

from models.audience import filters_to_wire
from notifications.audience_filter import build_audience_filter, evaluate_filter

KNOWN_TAGS = ["TK", "EK", "QR", "all_flights"]


class TestBuildAudienceFilter(unittest.TestCase):
    """Tests for build_audience_filter() token layout"""

    def test_wire_shape(self):
        """Exact token sequence for two changed airlines"""
        expression = build_audience_filter(["TK", "EK"], KNOWN_TAGS, "all_flights")

        self.assertEqual(
            filters_to_wire(expression),
            [
                {"field": "tag", "key": "all_flights", "relation": "=", "value": "1"},
                {"operator": "OR"},
                {"field": "tag", "key": "TK", "relation": "=", "value": "1"},
                {"operator": "OR"},
                {"field": "tag", "key": "EK", "relation": "=", "value": "1"},
                {"operator": "OR"},
                {"field": "tag", "key": "TK", "relation": "not_exists"},
                {"operator": "AND"},
                {"field": "tag", "key": "EK", "relation": "not_exists"},
                {"operator": "AND"},
                {"field": "tag", "key": "QR", "relation": "not_exists"},
            ],
        )

    def test_no_changed_airlines(self):
        """Empty code set keeps all-flights and unconfigured block"""
        wire = filters_to_wire(build_audience_filter([], KNOWN_TAGS, "all_flights"))

        self.assertEqual(wire[0]["key"], "all_flights")
        self.assertEqual(wire[1], {"operator": "OR"})
        self.assertEqual(
            [t.get("key") for t in wire[2:]], ["TK", None, "EK", None, "QR"]
        )

    def test_duplicate_codes_deduplicated(self):
        """Repeated codes produce a single condition, first-seen order"""
        wire = filters_to_wire(
            build_audience_filter(["EK", "TK", "EK", "TK"], KNOWN_TAGS, "all_flights")
        )
        equals_keys = [t["key"] for t in wire if t.get("relation") == "="]

        self.assertEqual(equals_keys, ["all_flights", "EK", "TK"])

    def test_unknown_and_blank_codes_not_targeted(self):
        """Unknown sentinel, None and blanks never become airline conditions"""
        wire = filters_to_wire(
            build_audience_filter(["unknown", None, "", "TK"], KNOWN_TAGS, "all_flights")
        )
        equals_keys = [t["key"] for t in wire if t.get("relation") == "="]

        self.assertEqual(equals_keys, ["all_flights", "TK"])

    def test_only_all_flights_known(self):
        """No unconfigured block when all-flights is the only known tag"""
        wire = filters_to_wire(
            build_audience_filter(["TK"], ["all_flights"], "all_flights")
        )

        self.assertEqual(
            wire,
            [
                {"field": "tag", "key": "all_flights", "relation": "=", "value": "1"},
                {"operator": "OR"},
                {"field": "tag", "key": "TK", "relation": "=", "value": "1"},
            ],
        )

    def test_and_block_is_last(self):
        """Every AND operator comes after the last OR operator"""
        expression = build_audience_filter(["TK", "EK"], KNOWN_TAGS, "all_flights")
        operators = [t["operator"] for t in filters_to_wire(expression) if "operator" in t]

        last_or = max(i for i, op in enumerate(operators) if op == "OR")
        first_and = min(i for i, op in enumerate(operators) if op == "AND")
        self.assertLess(last_or, first_and)

    def test_not_exists_has_no_value_key(self):
        """not_exists conditions are sent without a value"""
        wire = filters_to_wire(build_audience_filter([], ["TK"], "all_flights"))

        self.assertEqual(wire[-1], {"field": "tag", "key": "TK", "relation": "not_exists"})


class TestEvaluateFilter(unittest.TestCase):
    """Tests for targeting semantics of the compiled filter"""

    def setUp(self):
        self.expression = build_audience_filter(["TK", "EK"], KNOWN_TAGS, "all_flights")

    def test_all_flights_subscriber_matches(self):
        self.assertTrue(evaluate_filter(self.expression, {"all_flights": "1"}))

    def test_all_flights_with_other_airline_matches(self):
        """All-flights wins even when another airline tag is set"""
        self.assertTrue(
            evaluate_filter(self.expression, {"all_flights": "1", "QR": "1"})
        )

    def test_changed_airline_subscriber_matches(self):
        self.assertTrue(evaluate_filter(self.expression, {"TK": "1"}))

    def test_changed_airline_with_other_airline_matches(self):
        self.assertTrue(evaluate_filter(self.expression, {"EK": "1", "QR": "1"}))

    def test_unconfigured_subscriber_matches(self):
        self.assertTrue(evaluate_filter(self.expression, {}))

    def test_other_airline_subscriber_excluded(self):
        """Configured for an unchanged airline only"""
        self.assertFalse(evaluate_filter(self.expression, {"QR": "1"}))

    def test_tag_set_to_zero_is_configured(self):
        """A tag set to '0' exists, so the user is configured but not subscribed"""
        self.assertFalse(evaluate_filter(self.expression, {"TK": "0"}))

    def test_empty_expression_matches_nobody(self):
        self.assertFalse(evaluate_filter([], {}))


if __name__ == "__main__":
    unittest.main()
