"""Shared fakes for the socket, HTTP and notification layers."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from quizlive.core.services.session_client import SessionClient


class FakeSocket:
    """Stands in for ``socketio.Client``; records emits and lets tests fire events."""

    def __init__(self) -> None:
        self.handlers: dict[str, Callable[..., None]] = {}
        self.emitted: list[tuple[str, Any]] = []
        self.connect_calls: list[tuple[str, Any, Any]] = []
        self.connected = False

    def on(self, name: str, handler: Callable[..., None]) -> None:
        self.handlers[name] = handler

    def connect(self, url: str, auth: Any = None, transports: Any = None) -> None:
        self.connect_calls.append((url, auth, transports))
        self.connected = True
        self.handlers["connect"]()

    def disconnect(self) -> None:
        self.connected = False
        self.handlers["disconnect"]()

    def get_sid(self) -> str:
        return "sid-1"

    def emit(self, name: str, data: Any = None) -> None:
        self.emitted.append((name, data))

    def fire(self, name: str, payload: Any = None) -> None:
        if payload is None:
            self.handlers[name]()
        else:
            self.handlers[name](payload)

    def names(self) -> list[str]:
        return [name for name, _ in self.emitted]

    def payloads(self, name: str) -> list[Any]:
        return [data for emitted, data in self.emitted if emitted == name]


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self._body = body
        if raw is not None:
            self.content = raw
        else:
            self.content = b"" if body is None else b"{}"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeHttp:
    """Replays queued responses for ``requests.Session`` style calls."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, response: FakeResponse | Exception) -> None:
        self.responses.append(response)

    def request(self, method: str, url: str, params=None, json=None, timeout=None) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        return self._next()

    def get(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, "params": params, "headers": headers, "timeout": timeout})
        return self._next()

    def close(self) -> None:
        self.closed = True

    def _next(self) -> FakeResponse:
        if not self.responses:
            raise AssertionError("Unexpected HTTP call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[str] = []
        self.infos: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def fake_socket() -> FakeSocket:
    return FakeSocket()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def navigation() -> list:
    return []


@pytest.fixture
def host_client(fake_socket: FakeSocket) -> SessionClient:
    return SessionClient("http://quiz.test", "host-1", "s1", sio=fake_socket)


@pytest.fixture
def participant_client(fake_socket: FakeSocket) -> SessionClient:
    return SessionClient("http://quiz.test", "user-1", "s1", sio=fake_socket)


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def make_http() -> Callable[..., FakeHttp]:
    return FakeHttp


def question_payload(index: int = 0, **overrides: Any) -> dict[str, Any]:
    payload = {
        "_id": f"q{index + 1}",
        "question": f"Question {index + 1}",
        "type": "multiple-choice",
        "options": ["3", "4", "5"],
        "correctAnswer": 1,
        "index": index,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_question() -> Callable[..., dict[str, Any]]:
    return question_payload
