# Category -> push presentation (title and iOS sound file).
# Keys are NotificationCategory values.

DEFAULT_PRESENTATION = {
    "departure": {
        "title": "✈️ Departure Update",
        "sound": "departure_sound.aiff",
    },
    "arrival": {
        "title": "✈️ Arrival Update",
        "sound": "arrival_sound.aiff",
    },
}
