"""Application-wide state passed explicitly from the composition root.

Holds the signed-in user and the unread notification count. Views receive the
:class:`AppState` instance in their constructor and read it through typed
selectors instead of reaching into a global store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from threading import Lock
from typing import TYPE_CHECKING, Any, Callable

from quizlive.core.errors import ApiError

if TYPE_CHECKING:
    from quizlive.core.services.api_client import QuizApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurrentUser:
    id: str
    name: str
    email: str = ""
    avatar: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurrentUser":
        return cls(
            id=str(data.get("_id", data.get("id", ""))),
            name=data.get("name", ""),
            email=data.get("email", ""),
            avatar=data.get("avatar"),
        )


StateListener = Callable[["AppState"], None]


class AppState:
    def __init__(self) -> None:
        self._lock = Lock()
        self._current_user: CurrentUser | None = None
        self._user_loading: bool = True
        self._unread_count: int = 0
        self._listeners: list[StateListener] = []

    # --- Selectors ---

    def current_user(self) -> CurrentUser | None:
        with self._lock:
            return self._current_user

    def require_user(self) -> CurrentUser:
        user = self.current_user()
        if user is None:
            raise ApiError("User not authenticated", status_code=401)
        return user

    def user_id(self) -> str | None:
        user = self.current_user()
        return user.id if user else None

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def is_user_loading(self) -> bool:
        with self._lock:
            return self._user_loading

    def unread_count(self) -> int:
        with self._lock:
            return self._unread_count

    # --- Mutations ---

    def set_current_user(self, user: CurrentUser | None) -> None:
        with self._lock:
            self._current_user = user
        self._notify()

    def update_user(self, **changes: Any) -> None:
        with self._lock:
            if self._current_user is None:
                return
            self._current_user = replace(self._current_user, **changes)
        self._notify()

    def logout(self) -> None:
        self.set_current_user(None)

    def set_user_loading(self, loading: bool) -> None:
        with self._lock:
            self._user_loading = loading
        self._notify()

    def set_unread_count(self, count: int) -> None:
        with self._lock:
            self._unread_count = max(0, count)
        self._notify()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # --- Loaders ---

    def load_user(self, api: "QuizApiClient", user_id: str) -> CurrentUser | None:
        """Fetch the user record; on failure the state is signed out."""
        self.set_user_loading(True)
        try:
            user = api.get_user(user_id)
        except ApiError as exc:
            logger.warning("Could not load user %s: %s", user_id, exc.message)
            user = None
        finally:
            self.set_user_loading(False)
        self.set_current_user(user)
        return user

    def refresh_unread_count(self, api: "QuizApiClient") -> int:
        user_id = self.user_id()
        if user_id is None:
            return self.unread_count()
        try:
            count = api.get_unread_count(user_id)
        except ApiError as exc:
            logger.warning("Failed to fetch unread count: %s", exc.message)
            return self.unread_count()
        self.set_unread_count(count)
        return count

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)
