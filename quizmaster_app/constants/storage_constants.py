"""Keys and file settings for the key-value storage boundary."""

QUIZZES_KEY: str = "quizzes"
RESULTS_KEY_TEMPLATE: str = "quiz_results_{learner_id}"
CURRENT_USER_KEY: str = "quiz_user"

DEFAULT_DATA_DIR: str = ".quizmaster"
STORE_FILE_SUFFIX: str = ".json"
