"""Quiz-related constants shared across the core and the console front end."""

TICK_INTERVAL_SECONDS: float = 1.0
MIN_OPTION_COUNT: int = 2
MAX_OPTION_COUNT: int = 6
DEFAULT_OPTION_COUNT: int = 4

AI_DEFAULT_QUESTION_COUNT: int = 5
AI_MIN_QUESTION_COUNT: int = 1
AI_MAX_QUESTION_COUNT: int = 20

EXCELLENT_THRESHOLD: float = 0.8
GOOD_THRESHOLD: float = 0.6
