"""Qt UI constants and user-facing messages."""

WINDOW_TITLE: str = "QuizLive Host Console"
PARTICIPANT_WINDOW_TITLE: str = "QuizLive"

MODE_BUTTON_NEW: str = "New Quiz"
MODE_BUTTON_IMPORT: str = "Import Quiz Draft"
MODE_BUTTON_SAVE_FILE: str = "Save Draft to File"
MODE_BUTTON_SAVE_SERVER: str = "Save Quiz"
MODE_BUTTON_PUBLISH: str = "Publish Quiz"
MODE_BUTTON_SCHEDULE: str = "Schedule"
MODE_BUTTON_BROWSE: str = "Browse Public"
MODE_BUTTON_DELETE: str = "Delete Quiz"
MODE_BUTTON_HOST: str = "Host Live Session"
MODE_BUTTON_RESULTS: str = "Results"
MODE_BUTTON_ANALYTICS: str = "Analytics"
MODE_BUTTON_INVITE: str = "Invite"
MODE_BUTTON_BACK: str = "Back to Editor"
MODE_BUTTON_END: str = "End Quiz"

LOBBY_START_BUTTON: str = "Start Quiz"
LOBBY_AUTO_START_BUTTON: str = "Auto Start"
LOBBY_STOP_AUTO_START_BUTTON: str = "Stop Auto Start"
LOBBY_REMOVE_BUTTON: str = "Remove Participant"
LOBBY_DESCRIPTION: str = "Waiting room for participants before the quiz begins."
LOBBY_EMPTY_STATE: str = "No participants have joined yet."
LOBBY_READY_COUNT_TEMPLATE: str = "{count} participant(s) ready"
LOBBY_CODE_TEMPLATE: str = "Join code: {code}"

LIVE_PAUSE_BUTTON: str = "Pause"
LIVE_RESUME_BUTTON: str = "Resume"
LIVE_RESTART_BUTTON: str = "Restart Question"
LIVE_SKIP_BUTTON: str = "Skip Question"
LIVE_WAITING_FOR_ANSWERS: str = "Waiting for answers..."
LIVE_PAUSED_TEXT: str = "Quiz is paused by the host..."

PARTICIPANT_SUBMIT_BUTTON: str = "Submit Answer"
PARTICIPANT_LEAVE_BUTTON: str = "Leave Quiz"
PARTICIPANT_WAITING_TEXT: str = "Waiting for other participants"
PARTICIPANT_LOBBY_TEXT: str = "Waiting for the host to start the quiz..."

IMPORT_DIALOG_TITLE: str = "Select quiz draft"
IMPORT_FILE_FILTER: str = "Quiz drafts (*.txt);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Save quiz draft"
EXPORT_FILE_FILTER: str = "Quiz drafts (*.txt);;All files (*.*)"

NO_QUIZ_LOADED_MESSAGE: str = "Please import or open a quiz first."

# Notification texts shared by the host and participant session views.
PARTICIPANT_JOINED_TEMPLATE: str = "{name} joined the session!"
PARTICIPANT_LEFT_TEMPLATE: str = "{name} left the session"
PARTICIPANT_REMOVED_TEMPLATE: str = "{name} has been removed from the session"
NO_PARTICIPANTS_TEMPLATE: str = "No participants {count}"
COUNTDOWN_STARTED_TEMPLATE: str = "Quiz starting in {seconds} seconds!"
COUNTDOWN_STOPPED_MESSAGE: str = "Quiz countdown stopped"
QUIZ_STARTED_TEMPLATE: str = "Quiz started! {number} question started"
QUESTION_STARTED_TEMPLATE: str = "Question {number} started!"
QUIZ_PAUSED_MESSAGE: str = "Quiz paused"
QUIZ_RESUMED_MESSAGE: str = "Quiz resumed"
QUESTION_RESTARTED_MESSAGE: str = "Question restarted!"
QUESTION_SKIPPED_MESSAGE: str = "Question skipped!"
SESSION_ENDED_BY_HOST_MESSAGE: str = "Quiz session ended!"
SESSION_ENDED_TEMPLATE: str = "Quiz ended: {reason}"
TIME_EXPIRED_MESSAGE: str = "Time expired! No answer submitted."
LEFT_SESSION_MESSAGE: str = "Left the quiz session"
FEEDBACK_RATING_REQUIRED: str = "Please provide a rating before submitting."
FEEDBACK_THANKS: str = "Thank you for your feedback!"
SESSION_NOT_AVAILABLE: str = "Quiz session is not available"
JOIN_DETAILS_REQUIRED: str = "Please enter both quiz code and your name"
JOINING_QUIZ_TEMPLATE: str = "Joining quiz: {title}"
SESSION_HAS_ENDED_MESSAGE: str = "Quiz session has ended"
QUIZ_PAUSED_BY_HOST_MESSAGE: str = "Quiz paused by host"
QUIZ_RESUMED_TEMPLATE: str = "Quiz resumed! Question {number} started"
PARTICIPANT_COUNTDOWN_STOPPED_MESSAGE: str = "Countdown stopped"
INVALID_SESSION_MESSAGE: str = "Invalid quiz session or missing details"

EDITOR_ADD_BUTTON: str = "Add New Question"
EDITOR_SAVE_BUTTON: str = "Save Question"
EDITOR_DELETE_BUTTON: str = "Delete Question"
EDITOR_PREV_BUTTON: str = "Previous"
EDITOR_NEXT_BUTTON: str = "Next"
EDITOR_IMAGE_BUTTON: str = "Image"
EDITOR_ADD_MEDIA_BUTTON: str = "Attach Media"
EDITOR_CLEAR_MEDIA_BUTTON: str = "Clear Media"
EDITOR_COVER_BUTTON: str = "Cover Image"
PLACEHOLDER_QUESTION: str = "Enter your question text (supports Markdown + LaTeX)."
PLACEHOLDER_EXPLANATION: str = "Optional explanation shown after the answer is revealed."
