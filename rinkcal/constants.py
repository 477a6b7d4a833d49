from __future__ import annotations

# Bookable ice surfaces
RINK_NHL = 24  # 200ft x 85ft
RINK_OLYMPIC = 25  # 200ft x 100ft

RINK_NAMES: dict[int, str] = {
    RINK_NHL: "NHL",
    RINK_OLYMPIC: "OLY",
    29: "Unknown",
    62: "Training Area",
}

VISIBLE_RINK_IDS: tuple[int, ...] = (RINK_NHL, RINK_OLYMPIC)

# event_type_id codes from the recreation API
EVENT_TYPE_GAME = "g"
EVENT_TYPE_SESSION = "k"
EVENT_TYPE_LESSON = "L"
EVENT_TYPE_BLOCK = "b"

EVENT_TYPE_NAMES: dict[str, str] = {
    EVENT_TYPE_GAME: "game",
    EVENT_TYPE_SESSION: "session",
    EVENT_TYPE_LESSON: "lesson",
}

EXCLUDED_TEAM_IDS: tuple[int, ...] = (8644, 9192)

ORG_PREFIX = "OIC - "

UNKNOWN_TEAM = "Unknown Team"
FALLBACK_TITLE = "Event"

REGISTRATION_BASE_URL = "https://apps.daysmartrecreation.com/dash/x/#/online/sharks"
FACILITY_ID = 3
