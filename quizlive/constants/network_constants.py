"""Network configuration constants for the quiz client."""

DEFAULT_SERVER_URL: str = "http://localhost:5000"
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 15.0

SOCKET_TRANSPORTS: list[str] = ["websocket", "polling"]
SOCKET_RECONNECTION_ATTEMPTS: int = 0  # 0 means retry forever
SOCKET_RECONNECTION_DELAY_SECONDS: float = 1.0

UNSPLASH_API_URL: str = "https://api.unsplash.com"
GIPHY_API_URL: str = "https://api.giphy.com/v1/gifs"

SERVER_URL_ENV: str = "VITE_SERVER_URL"
UNSPLASH_KEY_ENV: str = "VITE_UNSPLASH_KEY"
GIFS_KEY_ENV: str = "VITE_GIFS_KEY"
LOG_LEVEL_ENV: str = "QUIZLIVE_LOG_LEVEL"
REQUEST_TIMEOUT_ENV: str = "QUIZLIVE_REQUEST_TIMEOUT"

DEFAULT_WEB_URL: str = "http://localhost:5173"
INVITE_LINK_TEMPLATE: str = "{web_url}/activity/start-join?code={code}"

WEB_URL_ENV: str = "QUIZLIVE_WEB_URL"
USER_ID_ENV: str = "QUIZLIVE_USER_ID"
