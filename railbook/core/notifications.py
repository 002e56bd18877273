"""
User-visible notifications and confirmation prompts.
Rendering is up to the front end; services only talk to these seams.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List

Confirm = Callable[[str], bool]


@dataclass(frozen=True)
class Notification:
    level: str  # success, info, error
    message: str


class Notifier(ABC):
    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass

    def success(self, message: str) -> None:
        self.notify(Notification("success", message))

    def info(self, message: str) -> None:
        self.notify(Notification("info", message))

    def error(self, message: str) -> None:
        self.notify(Notification("error", message))


@dataclass
class RecordingNotifier(Notifier):
    """Keeps every notification in order."""

    history: List[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)

    def messages(self, level: str = None) -> List[str]:
        return [n.message for n in self.history if level is None or n.level == level]

    @property
    def last(self) -> Notification:
        return self.history[-1]

    def clear(self) -> None:
        self.history.clear()


def always(answer: bool) -> Confirm:
    """A confirm callable that gives the same answer to every prompt."""
    return lambda message: answer
