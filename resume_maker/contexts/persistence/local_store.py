"""
Local durable storage.

A JSON file on disk used as a key-value store of strings, plus the best-effort
document mirror built on top of it. The mirror never raises: a missing or
unreadable document falls back to None (the caller substitutes the default
document) and write failures are logged and dropped.

Store file layout:
    {
      "resume-maker:v1": "<JSON-serialized document>",
      "resume-maker:v1:saved": "<JSON-serialized save status>"
    }
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from resume_maker.contexts.editing.document import Document
from resume_maker.contexts.persistence.logger import _log_debug, _log_warning
from resume_maker.contexts.persistence.save_status import SaveState, SaveStatus

load_dotenv()
STORE_PATH = Path(
    os.getenv("RESUME_MAKER_STORE_PATH", str(Path.home() / ".resume_maker" / "local_storage.json"))
).expanduser()

STORAGE_KEY = "resume-maker:v1"
SAVED_KEY_SUFFIX = ":saved"
CORRUPT_SUFFIX = ".corrupt"


class LocalStore:
    """
    Key-value store of strings persisted as one JSON file.

    Writes go to a temp file in the same directory first and are moved over the
    store file only once fully written.
    """

    def __init__(self, path: Path = None):
        self.path = Path(path).expanduser() if path is not None else STORE_PATH

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Store file is not a JSON object: {self.path}")
        return data

    def _read_for_write(self) -> Dict[str, str]:
        """
        Read the store before a write. An unparseable store file is moved aside
        to {name}.corrupt and replaced by an empty store, so writes keep working.
        """
        try:
            return self._read_all()
        except ValueError as e:
            backup = self.path.with_name(self.path.name + CORRUPT_SUFFIX)
            shutil.move(str(self.path), str(backup))
            _log_warning(f"Store file unreadable ({e}); moved to {backup.name}, starting empty")
            return {}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=self.path.parent, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_path, self.path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        """
        Get the value stored under key, or None if absent.

        Raises:
            OSError: If the store file cannot be read
            ValueError: If the store file is not valid JSON
        """
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.

        An unreadable store file is moved aside first (see _read_for_write).

        Raises:
            OSError: If the store file cannot be written
        """
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_for_write()
        if key in data:
            del data[key]
            self._write_all(data)

    def keys(self) -> List[str]:
        return list(self._read_all())


def load_local(store: LocalStore, key: str = STORAGE_KEY) -> Optional[Document]:
    """
    Load the mirrored document.

    Returns:
        The stored Document, or None when absent or unreadable. Never raises.
    """
    try:
        raw = store.get(key)
    except (OSError, ValueError) as e:
        _log_warning(f"Local store unreadable, using default document: {e}")
        return None

    if raw is None:
        _log_debug(f"No document stored under '{key}'")
        return None

    try:
        return Document.from_dict(json.loads(raw))
    except (TypeError, ValueError) as e:
        # DocumentFormatError and JSONDecodeError are both ValueErrors
        _log_warning(f"Stored document under '{key}' is invalid, using default document: {e}")
        return None


def save_local(store: LocalStore, document: Document, key: str = STORAGE_KEY) -> bool:
    """
    Mirror the document to local storage. Best effort: failures are logged and dropped.

    Returns:
        True if the write succeeded
    """
    try:
        store.set(key, json.dumps(document.to_dict()))
    except (OSError, TypeError, ValueError) as e:
        _log_warning(f"Could not mirror document to local store: {e}")
        return False
    return True


def load_save_status(store: LocalStore, key: str = STORAGE_KEY) -> SaveStatus:
    """Load the last remote save status, falling back to UNSAVED."""
    try:
        raw = store.get(key + SAVED_KEY_SUFFIX)
        if raw is None:
            return SaveStatus()
        data = json.loads(raw)
        if not isinstance(data, dict) or not data.get("slug"):
            return SaveStatus()
        return SaveStatus(state=SaveState.SAVED, id=data.get("id"), slug=data["slug"])
    except (OSError, TypeError, ValueError) as e:
        _log_warning(f"Stored save status is invalid, treating resume as unsaved: {e}")
        return SaveStatus()


def save_save_status(store: LocalStore, status: SaveStatus, key: str = STORAGE_KEY) -> bool:
    """Persist a SAVED status so later sessions keep updating the same remote resume."""
    if status.state is not SaveState.SAVED:
        return False
    try:
        store.set(key + SAVED_KEY_SUFFIX, json.dumps({"id": status.id, "slug": status.slug}))
    except (OSError, ValueError) as e:
        _log_warning(f"Could not store save status: {e}")
        return False
    return True
