"""Display-only mirror of the server's question countdown.

The server is the only authority on when a question closes. The mirror is
seeded from the value carried by ``quizStarted``/``nextQuestion``/
``quizResumed`` and decremented by a one-second ticker owned by the view.
It is never resynchronised between pushes, so drift against the server clock
is expected.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Countdown:
    """Seconds remaining for the current question, or ``None`` when idle."""

    remaining: int | None = None
    paused: bool = False

    def seed(self, seconds: int | None) -> None:
        """Start counting down from ``seconds``; ``None`` clears the mirror.

        A negative value from a drifting server clock is treated as zero.
        """
        self.remaining = None if seconds is None else max(seconds, 0)
        self.paused = False

    def clear(self) -> None:
        self.remaining = None

    def pause(self) -> None:
        self.paused = True

    def resume(self, seconds: int | None = None) -> None:
        """Unfreeze the mirror, reseeding it when the server sent a value."""
        self.paused = False
        if seconds is not None:
            self.seed(seconds)

    @property
    def is_running(self) -> bool:
        return not self.paused and self.remaining is not None and self.remaining > 0

    @property
    def is_expired(self) -> bool:
        return self.remaining == 0

    def tick(self) -> bool:
        """Advance one second. Returns True on the tick that reaches zero."""
        if not self.is_running:
            return False
        self.remaining -= 1
        return self.remaining == 0
