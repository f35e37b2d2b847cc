"""Static metadata describing QuizLive."""

APP_NAME = "QuizLive"
APP_VERSION = "0.2"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizLive is the host and participant console for live multiplayer quizzes. "
    "Author quizzes, run live sessions against the quiz server, and review results."
)

HELP_TEXT = (
    "Quizzes can be drafted in a plain .txt file and imported before publishing:\n\n"
    "TYPE: multiple-choice\n"
    "Q: What is the capital of France?\n"
    "A: Berlin\nB: Paris\nC: Rome\nD: Madrid\n"
    "CORRECT: B\nEXPLANATION: Paris has been the capital since 987.\n\n"
    "---\n\n"
    "TYPE: true-false\n"
    "Q: The Earth orbits the Sun.\n"
    "CORRECT: TRUE\n\n"
    "---\n\n"
    "TYPE: short-answer\n"
    "Q: Chemical symbol for gold?\n"
    "CORRECT: Au"
)
