"""
Remote save status.

    UNSAVED --begin--> SAVING --succeed--> SAVED{id, slug}
                          |
                          +----fail----> (state held before begin)

A SAVED status keeps accepting saves; its id is sent with each later save so the
server updates the same resume. A status loaded from a public link has a slug but
no id, so the next save creates a new resume. Overlapping saves are rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from resume_maker.contexts.persistence.exceptions import SaveInProgressError
from resume_maker.contexts.persistence.logger import log_save_transition


class SaveState(str, Enum):
    UNSAVED = "unsaved"
    SAVING = "saving"
    SAVED = "saved"


@dataclass(frozen=True)
class SaveStatus:
    """
    Snapshot of the remote save state.

    Attributes:
        state: Current state
        id: Server-assigned resume id (None until saved by this user)
        slug: Public slug (None until saved or opened from a public link)
    """

    state: SaveState = SaveState.UNSAVED
    id: Optional[str] = None
    slug: Optional[str] = None

    @classmethod
    def saved(cls, id: Optional[str], slug: str) -> "SaveStatus":
        return cls(state=SaveState.SAVED, id=id, slug=slug)


class SaveTracker:
    """Drives SaveStatus transitions for one session."""

    def __init__(self, status: SaveStatus = None):
        self.status = status or SaveStatus()
        self._before_save: Optional[SaveStatus] = None

    @property
    def existing_id(self) -> Optional[str]:
        """Id to send with the next save, if the resume was saved before."""
        return self.status.id

    def begin(self) -> SaveStatus:
        """
        Enter SAVING.

        Raises:
            SaveInProgressError: If a save is already in flight
        """
        if self.status.state is SaveState.SAVING:
            raise SaveInProgressError("A save is already in progress")
        self._before_save = self.status
        self._transition(SaveStatus(SaveState.SAVING, id=self.status.id, slug=self.status.slug))
        return self.status

    def succeed(self, id: str, slug: str) -> SaveStatus:
        self._require_saving()
        self._before_save = None
        self._transition(SaveStatus.saved(id, slug))
        return self.status

    def fail(self) -> SaveStatus:
        """Leave SAVING, restoring the status held before the attempt."""
        self._require_saving()
        previous = self._before_save or SaveStatus()
        self._before_save = None
        self._transition(previous)
        return self.status

    def opened_public(self, slug: str) -> SaveStatus:
        """Record that the document was loaded from a public link."""
        self._transition(SaveStatus.saved(None, slug))
        return self.status

    def _require_saving(self) -> None:
        if self.status.state is not SaveState.SAVING:
            raise RuntimeError(f"No save in progress (status: {self.status.state.value})")

    def _transition(self, new_status: SaveStatus) -> None:
        log_save_transition(self.status.state.value, new_status.state.value, new_status.slug)
        self.status = new_status
