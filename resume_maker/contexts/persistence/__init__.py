"""
Persistence Context

Responsibilities:
- Mirrors the document to local durable storage after every mutation
- Loads the mirrored document at session start
- Publishes the document to the remote store and loads public documents by slug
- Tracks the remote save status

Owns: Local key-value store, remote store client, save status
Never: Mutates document content
"""

from resume_maker.contexts.persistence.exceptions import RemoteSaveError, SaveInProgressError
from resume_maker.contexts.persistence.local_store import (
    STORAGE_KEY,
    LocalStore,
    load_local,
    save_local,
)
from resume_maker.contexts.persistence.remote_store import (
    RemoteStore,
    SavedResume,
    slug_from_location,
)
from resume_maker.contexts.persistence.save_status import SaveState, SaveStatus, SaveTracker

__all__ = [
    "STORAGE_KEY",
    "LocalStore",
    "load_local",
    "save_local",
    "RemoteStore",
    "SavedResume",
    "slug_from_location",
    "RemoteSaveError",
    "SaveInProgressError",
    "SaveState",
    "SaveStatus",
    "SaveTracker",
]
