"""
Audience filter compilation for push notifications.

Builds the flat filter list the push service uses to pick recipients:

    all_flights = 1
    OR <changed airline> = 1 (one per airline)
    OR (<known tag> not set AND <known tag> not set AND ...)

The push service has no parentheses. It splits the list on OR and AND-s the
conditions inside each part, so the AND block must stay at the tail.
"""

from typing import Iterable, List, Mapping, Optional, Sequence

from models.audience import (
    AND,
    OR,
    FilterExpression,
    FilterOperator,
    TagCondition,
    TAG_SET_VALUE,
)
from notifications.change_aggregator import UNKNOWN_AIRLINE


def _unique_codes(codes: Iterable[Optional[str]], exclude: set[str]) -> List[str]:
    """Distinct non-empty codes in first-seen order, minus excluded ones."""
    unique: List[str] = []
    for code in codes:
        if not code or code in exclude or code in unique:
            continue
        unique.append(code)
    return unique


def build_audience_filter(
    changed_airline_codes: Iterable[Optional[str]],
    known_tags: Sequence[str],
    all_flights_tag: str,
) -> FilterExpression:
    """
    Compile the target audience for a notification.

    Audience = all-flights subscribers OR subscribers of any changed airline
    OR subscribers who have not set any known tag.

    Args:
        changed_airline_codes: Airline codes affected by the notification.
            Duplicates, blanks and the unknown sentinel are dropped.
        known_tags: Every tag a subscriber can set (may include all_flights_tag)
        all_flights_tag: Tag for subscribers who want every update

    Returns:
        Ordered list of tag conditions and operators
    """
    expression: FilterExpression = [TagCondition.equals(all_flights_tag)]

    airline_codes = _unique_codes(
        changed_airline_codes, exclude={UNKNOWN_AIRLINE, all_flights_tag}
    )
    for code in airline_codes:
        expression.append(OR)
        expression.append(TagCondition.equals(code))

    # Unconfigured users have none of the known tags set
    unconfigured_block: FilterExpression = []
    for index, tag in enumerate(_unique_codes(known_tags, exclude={all_flights_tag})):
        if index > 0:
            unconfigured_block.append(AND)
        unconfigured_block.append(TagCondition.not_exists(tag))

    if unconfigured_block:
        expression.append(OR)
        expression.extend(unconfigured_block)

    return expression


def _condition_holds(condition: TagCondition, subscriber_tags: Mapping[str, str]) -> bool:
    if condition.relation == "not_exists":
        return condition.key not in subscriber_tags
    expected = condition.value if condition.value is not None else TAG_SET_VALUE
    return subscriber_tags.get(condition.key) == expected


def evaluate_filter(
    expression: FilterExpression, subscriber_tags: Mapping[str, str]
) -> bool:
    """
    Decide whether a subscriber with the given tags matches a filter list.

    Mirrors the push service: OR separates clauses, conditions within a
    clause (explicit AND or adjacent) must all hold. An empty list matches
    nobody.
    """
    clause_results: List[bool] = []
    current_clause: Optional[bool] = None

    for token in expression:
        if isinstance(token, FilterOperator):
            if token.operator == "OR" and current_clause is not None:
                clause_results.append(current_clause)
                current_clause = None
            continue

        holds = _condition_holds(token, subscriber_tags)
        current_clause = holds if current_clause is None else current_clause and holds

    if current_clause is not None:
        clause_results.append(current_clause)

    return any(clause_results)
