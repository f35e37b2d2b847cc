"""Quiz-related constants shared across UI and core layers."""

COUNTDOWN_TICK_INTERVAL_MS: int = 1000
DEFAULT_QUESTION_COUNTDOWN_SECONDS: int = 10
REVEAL_DELAY_SECONDS: int = 5
AUTO_START_PRESETS_SECONDS: tuple[int, ...] = (10, 30, 60)

DEFAULT_TIME_LIMIT_SECONDS: int = 30
DEFAULT_MAX_PARTICIPANTS: int = 100

MEDIA_PAGE_SIZE: int = 30
ANALYTICS_SESSIONS_PER_PAGE: int = 6

DIFFICULTIES: tuple[str, ...] = ("beginner", "intermediate", "advanced")
MIN_RATING: int = 1
MAX_RATING: int = 5
