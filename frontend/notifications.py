from dataclasses import dataclass, field
from typing import List, Literal


@dataclass
class Notification:
    """A dismissible toast."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"
    dismissed: bool = False


@dataclass
class NotificationCenter:
    items: List[Notification] = field(default_factory=list)

    def notify(self, title: str, description: str, variant="default") -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        self.items.append(note)
        return note

    def dismiss(self, note: Notification):
        note.dismissed = True

    @property
    def active(self) -> List[Notification]:
        return [n for n in self.items if not n.dismissed]

    @property
    def latest(self) -> Notification | None:
        return self.items[-1] if self.items else None
