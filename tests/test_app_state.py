from __future__ import annotations

import pytest

from quizlive.core.app_state import AppState, CurrentUser
from quizlive.core.errors import ApiError


class StubApi:
    def __init__(self, user: CurrentUser | None = None, error: ApiError | None = None, count: int = 0) -> None:
        self.user = user
        self.error = error
        self.count = count

    def get_user(self, user_id: str) -> CurrentUser | None:
        if self.error is not None:
            raise self.error
        return self.user

    def get_unread_count(self, user_id: str) -> int:
        if self.error is not None:
            raise self.error
        return self.count


class TestAppState:
    def setup_method(self):
        self.state = AppState()
        self.seen = []
        self.state.subscribe(lambda state: self.seen.append(state.user_id()))

    def test_starts_loading_and_signed_out(self):
        assert self.state.is_user_loading()
        assert not self.state.is_authenticated()
        with pytest.raises(ApiError):
            self.state.require_user()

    def test_load_user(self):
        user = self.state.load_user(StubApi(CurrentUser(id="u1", name="Ada")), "u1")

        assert user.name == "Ada"
        assert self.state.require_user().id == "u1"
        assert not self.state.is_user_loading()
        assert self.seen[-1] == "u1"

    def test_failed_load_signs_out(self):
        self.state.set_current_user(CurrentUser(id="old", name="Old"))

        user = self.state.load_user(StubApi(error=ApiError("Failed to fetch user", status_code=500)), "u1")

        assert user is None
        assert self.state.current_user() is None
        assert not self.state.is_user_loading()

    def test_update_user(self):
        self.state.set_current_user(CurrentUser(id="u1", name="Ada"))

        self.state.update_user(name="Ada L.")

        assert self.state.current_user().name == "Ada L."

    def test_unread_count_never_negative(self):
        self.state.set_unread_count(-3)

        assert self.state.unread_count() == 0

    def test_refresh_unread_count_keeps_old_value_on_error(self):
        self.state.set_current_user(CurrentUser(id="u1", name="Ada"))
        self.state.set_unread_count(2)

        assert self.state.refresh_unread_count(StubApi(error=ApiError("down"))) == 2
        assert self.state.refresh_unread_count(StubApi(count=7)) == 7

    def test_unsubscribe(self):
        state = AppState()
        calls = []
        unsubscribe = state.subscribe(lambda s: calls.append(s))
        unsubscribe()

        state.logout()

        assert calls == []


class TestCurrentUser:
    def test_from_mongo_style_record(self):
        user = CurrentUser.from_dict({"_id": "u1", "name": "Ada", "email": "ada@test"})

        assert (user.id, user.name, user.email, user.avatar) == ("u1", "Ada", "ada@test", None)
