"""Static metadata describing QuizMaster Pro."""

APP_NAME = "QuizMaster Pro"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizMaster Pro lets administrators author quizzes by hand or with a simulated AI "
    "generator, lets learners take them, and explains results through a rule-based assistant."
)

HELP_TEXT = (
    "Quizzes can be written in the builder or imported from a .txt file:\n\n"
    "TITLE: Python Basics\n"
    "DESCRIPTION: A short warm-up\n"
    "TAGS: python, programming\n\n"
    "Q: Which keyword defines a function?\n"
    "A: func\nB: def\nC: lambda\nD: fn\n"
    "CORRECT: B\n\n"
    "Q: Is Python dynamically typed?\n"
    "A: Yes\nB: No\n"
    "CORRECT: A"
)
