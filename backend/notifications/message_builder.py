"""
Presentation of change groups as push notifications.

Handles titles, sounds and summary text so the aggregation logic stays free of
literal strings.
"""

from typing import Dict, List, Mapping, Optional

from config.airlines import AirlineCatalog
from config.presentation import DEFAULT_PRESENTATION
from models.notification import PushNotification
from notifications.audience_filter import build_audience_filter
from notifications.change_aggregator import COMBINED_GROUP, ChangeGroup


def summarize_group(group: ChangeGroup, catalog: AirlineCatalog) -> str:
    """
    Summary body for a group with more than one change.

    Per-airline groups name the airline; the combined group does not.
    """
    first_message = group.first_change.message
    if group.key == COMBINED_GROUP:
        return f"{group.count} flight updates. First: {first_message}"

    airline_name = catalog.display_name(group.airline_codes[0] if group.airline_codes else None)
    return f"{group.count} updates for {airline_name}. First: {first_message}"


def presentation_for(
    group: ChangeGroup, presentation: Mapping[str, Mapping[str, str]]
) -> Dict[str, Optional[str]]:
    """Look up title and sound for the group's category."""
    entry = presentation.get(group.category.value, {})
    return {
        "title": entry.get("title") or f"Flight Update ({group.category.value})",
        "sound": entry.get("sound"),
    }


def build_push_notification(
    group: ChangeGroup,
    catalog: AirlineCatalog,
    presentation: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> PushNotification:
    """
    Compile one change group into a notification with its audience filter.

    Args:
        group: Non-empty change group
        catalog: Airline lookup (known tags, display names)
        presentation: Category -> {"title", "sound"} mapping. Defaults to
                      DEFAULT_PRESENTATION.

    Returns:
        PushNotification ready for dispatch
    """
    presentation = presentation if presentation is not None else DEFAULT_PRESENTATION
    look = presentation_for(group, presentation)

    filters = build_audience_filter(
        group.airline_codes,
        known_tags=catalog.known_tags,
        all_flights_tag=catalog.all_flights_tag,
    )

    return PushNotification(
        group_key=group.key,
        airline_codes=group.airline_codes,
        filters=filters,
        title=look["title"],
        body=group.summary_message(lambda g: summarize_group(g, catalog)),
        sound=look["sound"],
        category=group.category.value,
        change_count=group.count,
    )


def build_push_notifications(
    groups: List[ChangeGroup],
    catalog: AirlineCatalog,
    presentation: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> List[PushNotification]:
    return [build_push_notification(g, catalog, presentation) for g in groups if g.changes]
