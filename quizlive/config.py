"""Runtime configuration read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from quizlive.constants.network_constants import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SERVER_URL,
    DEFAULT_WEB_URL,
    GIFS_KEY_ENV,
    INVITE_LINK_TEMPLATE,
    LOG_LEVEL_ENV,
    REQUEST_TIMEOUT_ENV,
    SERVER_URL_ENV,
    UNSPLASH_KEY_ENV,
    USER_ID_ENV,
    WEB_URL_ENV,
)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Settings shared by the REST, socket and media clients."""

    server_url: str = DEFAULT_SERVER_URL
    web_url: str = DEFAULT_WEB_URL
    user_id: str | None = None
    unsplash_key: str | None = None
    gifs_key: str | None = None
    log_level: str = "INFO"
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "ClientConfig":
        """Build a config from ``os.environ`` after loading ``env_file`` if present.

        Values already present in the environment win over the ``.env`` file.
        """
        if env_file is not None and env_file.exists():
            load_dotenv(env_file, override=False)

        timeout_raw = os.environ.get(REQUEST_TIMEOUT_ENV, "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT_SECONDS
        except ValueError as exc:
            raise ValueError(f"{REQUEST_TIMEOUT_ENV} must be a number of seconds.") from exc
        if timeout <= 0:
            raise ValueError(f"{REQUEST_TIMEOUT_ENV} must be positive.")

        return cls(
            server_url=(os.environ.get(SERVER_URL_ENV, "").strip() or DEFAULT_SERVER_URL).rstrip("/"),
            web_url=(os.environ.get(WEB_URL_ENV, "").strip() or DEFAULT_WEB_URL).rstrip("/"),
            user_id=os.environ.get(USER_ID_ENV, "").strip() or None,
            unsplash_key=os.environ.get(UNSPLASH_KEY_ENV, "").strip() or None,
            gifs_key=os.environ.get(GIFS_KEY_ENV, "").strip() or None,
            log_level=os.environ.get(LOG_LEVEL_ENV, "INFO").strip() or "INFO",
            request_timeout=timeout,
        )

    def invite_link(self, code: str) -> str:
        return INVITE_LINK_TEMPLATE.format(web_url=self.web_url, code=code)
