"""Notifications and callbacks emitted by the study engines.

Engines never talk to a UI directly: they invoke a ``notify`` callback with a
``Notification`` and an ``on_complete`` callback when a session is finished.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel


class NotificationKind(str, Enum):
    CORRECT_ANSWER = "correct_answer"
    INCORRECT_ANSWER = "incorrect_answer"
    MATCH_FOUND = "match_found"
    NOT_A_MATCH = "not_a_match"
    ALL_MATCHED = "all_matched"


NOTIFICATION_MESSAGES: dict[NotificationKind, str] = {
    NotificationKind.CORRECT_ANSWER: "Correct answer!",
    NotificationKind.INCORRECT_ANSWER: "That's not correct. Try again!",
    NotificationKind.MATCH_FOUND: "Match found!",
    NotificationKind.NOT_A_MATCH: "Not a match. Try again!",
    NotificationKind.ALL_MATCHED: "Great job! All matches found!",
}


class Notification(BaseModel):
    kind: NotificationKind
    message: str

    @classmethod
    def of(cls, kind: NotificationKind) -> "Notification":
        return cls(kind=kind, message=NOTIFICATION_MESSAGES[kind])


NotifyCallback = Callable[[Notification], None]
CompleteCallback = Callable[[], None]


def emit(notify: Optional[NotifyCallback], kind: NotificationKind) -> None:
    if notify is not None:
        notify(Notification.of(kind))
