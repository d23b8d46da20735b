"""
Editing Session

The form controller: one EditorSession holds the current document, the active
tab and the remote save status, and routes every edit through the mutator.
Each committed mutation is mirrored to local storage in the same call, and the
preview is recomputed from the current document on demand.

Typical use:
    session = EditorSession.start(LocalStore(), RemoteStore(), location="/p/abc123")
    session.update("profile.name", "Ada Lovelace")
    session.add_skill("Python")
    result = session.export(output_dir=Path("out"))
    saved = session.publish()
"""

from pathlib import Path
from typing import Any, Optional, Union

from resume_maker.contexts.editing.defaults import default_document
from resume_maker.contexts.editing.document import Document, Theme
from resume_maker.contexts.editing.form import SECTION_FACTORIES, Tab
from resume_maker.contexts.editing.logger import (
    _log_info,
    _log_warning,
    log_mutation,
    log_session_start,
)
from resume_maker.contexts.editing.mutator import (
    PathLike,
    add_array_item,
    experience_field,
    meta_field,
    project_field,
    remove_array_item,
    skill,
    update,
)
from resume_maker.contexts.persistence.local_store import (
    STORAGE_KEY,
    LocalStore,
    load_local,
    load_save_status,
    save_local,
    save_save_status,
)
from resume_maker.contexts.persistence.remote_store import (
    RemoteStore,
    SavedResume,
    resume_title,
    slug_from_location,
)
from resume_maker.contexts.persistence.save_status import SaveStatus, SaveTracker
from resume_maker.contexts.rendering.exporter import (
    DEFAULT_SCALE,
    ExportResult,
    Rasterizer,
    export_resume,
    export_to_document,
)
from resume_maker.contexts.rendering.rasterizer import capture_surface
from resume_maker.contexts.templating.layout import LayoutNode
from resume_maker.contexts.templating.renderer import render, resolve_theme
from resume_maker.contexts.templating.surface import RenderedSurface, render_surface


class EditorSession:
    """
    Explicit editing context: document, tab and save status for one user.

    Attributes:
        document: Current document (replaced, never mutated in place)
        active_tab: Tab currently shown by the form
        local_store: Durable mirror of the document
        remote_store: Publish API client (None when working offline)
        storage_key: Key the document is mirrored under
    """

    def __init__(
        self,
        document: Document,
        local_store: LocalStore,
        remote_store: Optional[RemoteStore] = None,
        active_tab: Tab = Tab.PROFILE,
        save_status: Optional[SaveStatus] = None,
        storage_key: str = STORAGE_KEY,
    ):
        self.document = document
        self.local_store = local_store
        self.remote_store = remote_store
        self.active_tab = Tab(active_tab)
        self.storage_key = storage_key
        self._tracker = SaveTracker(save_status)

    @classmethod
    def start(
        cls,
        local_store: LocalStore,
        remote_store: Optional[RemoteStore] = None,
        location: Optional[str] = None,
        storage_key: str = STORAGE_KEY,
    ) -> "EditorSession":
        """
        Open a session.

        The document comes from local storage, falling back to the default
        document. When location is a public link ("/p/{slug}") and the remote
        store returns that document, it replaces the local one, the session
        switches to the preview tab and the save status records the slug. A
        failed remote load leaves the local document and profile tab in place.
        """
        document = load_local(local_store, storage_key)
        source = "local"
        if document is None:
            document = default_document()
            source = "default"

        session = cls(
            document=document,
            local_store=local_store,
            remote_store=remote_store,
            save_status=load_save_status(local_store, storage_key),
            storage_key=storage_key,
        )

        slug = slug_from_location(location)
        if slug is not None:
            if session.open_public(slug):
                source = f"public '{slug}'"
            else:
                _log_warning(f"Public resume '{slug}' unavailable, keeping {source} document")

        log_session_start(source, session.active_tab.value)
        return session

    # State

    @property
    def save_status(self) -> SaveStatus:
        return self._tracker.status

    def select_tab(self, tab: Union[Tab, str]) -> Tab:
        self.active_tab = Tab(tab)
        return self.active_tab

    def _commit(self, document: Document, operation: str, path: Any) -> Document:
        log_mutation(operation, str(path))
        self.document = document
        save_local(self.local_store, document, self.storage_key)
        return document

    # Path-addressed edits

    def update(self, path: PathLike, value: Any) -> Document:
        return self._commit(update(self.document, path, value), "update", path)

    def add_item(self, path: PathLike, factory=None) -> Document:
        """
        Append a new entry to the list at path.

        Without a factory, the section's empty-entry factory is used for
        experience, education and projects.
        """
        if factory is None:
            factory = SECTION_FACTORIES.get(str(path))
            if factory is None:
                raise ValueError(f"No default entry for '{path}'; pass a factory")
        return self._commit(add_array_item(self.document, path, factory), "add", path)

    def remove_item(self, path: PathLike, index: int) -> Document:
        return self._commit(remove_array_item(self.document, path, index), "remove", path)

    # Form helpers

    def add_skill(self, text: str) -> bool:
        """Append a trimmed skill. Blank input is ignored; returns whether a skill was added."""
        value = text.strip()
        if not value:
            return False
        self.add_item(skill(), lambda: value)
        return True

    def remove_skill(self, index: int) -> Document:
        return self.remove_item(skill(), index)

    def clear_skills(self) -> Document:
        return self.update(skill(), [])

    def add_bullet(self, experience_index: int) -> Document:
        return self.add_item(experience_field(experience_index, "bullets"), str)

    def remove_bullet(self, experience_index: int, bullet_index: int) -> Document:
        return self.remove_item(experience_field(experience_index, "bullets"), bullet_index)

    def add_tech(self, project_index: int, text: str) -> bool:
        """Append a trimmed tech tag to a project. Blank input is ignored."""
        value = text.strip()
        if not value:
            return False
        self.add_item(project_field(project_index, "tech"), lambda: value)
        return True

    def remove_tech(self, project_index: int, tech_index: int) -> Document:
        return self.remove_item(project_field(project_index, "tech"), tech_index)

    def set_theme(self, theme: Union[Theme, str]) -> Document:
        """
        Raises:
            UnknownThemeError: If theme names no known layout
        """
        return self.update(meta_field("theme"), resolve_theme(theme))

    def set_dark(self, dark: bool) -> Document:
        return self.update(meta_field("dark"), dark)

    def load_document(self, document: Document) -> Document:
        """Replace the whole document (e.g., from an imported file)."""
        return self._commit(document.clone(), "replace", "document")

    def reset(self) -> Document:
        """Replace the document with the starter document."""
        return self._commit(default_document(), "reset", "document")

    # Preview and export

    def render(self) -> LayoutNode:
        return render(self.document, self.document.meta.theme)

    def surface(self) -> RenderedSurface:
        return render_surface(self.document)

    def export(
        self,
        output_dir: Optional[Path] = None,
        log_dir: Optional[Path] = None,
        scale: float = DEFAULT_SCALE,
        rasterize: Rasterizer = capture_surface,
    ) -> ExportResult:
        """
        Export the current document to a PDF.

        With output_dir or log_dir unset the export is written to the dated
        results directory with a session log, like every other export.
        """
        return export_resume(
            self.surface(), output_dir=output_dir, log_dir=log_dir, scale=scale, rasterize=rasterize
        )

    def export_bytes(
        self, scale: float = DEFAULT_SCALE, rasterize: Rasterizer = capture_surface
    ) -> ExportResult:
        """Export the current document to an in-memory PDF."""
        return export_to_document(self.surface(), scale=scale, rasterize=rasterize)

    # Remote store

    def _require_remote(self) -> RemoteStore:
        if self.remote_store is None:
            raise RuntimeError("No remote store configured for this session")
        return self.remote_store

    def open_public(self, slug: str) -> bool:
        """
        Load a published document by slug.

        Returns:
            True if the document was loaded; False leaves the session unchanged
        """
        document = self._require_remote().load(slug)
        if document is None:
            return False

        self._commit(document, "open", f"/p/{slug}")
        self._tracker.opened_public(slug)
        self.active_tab = Tab.PREVIEW
        return True

    def publish(self) -> SavedResume:
        """
        Save the current document to the remote store.

        The first save creates a resume; later saves send the stored id so the
        server updates it. If the save raises anything (including an interrupt)
        the save status returns to what it was before the attempt.

        Raises:
            SaveInProgressError: If a save is already in flight
            RemoteSaveError: With the message to show the user
        """
        remote = self._require_remote()
        self._tracker.begin()

        try:
            saved = remote.save(self._tracker.existing_id, self.document, resume_title(self.document))
        except BaseException:
            self._tracker.fail()
            raise

        status = self._tracker.succeed(saved.id, saved.slug)
        save_save_status(self.local_store, status, self.storage_key)
        _log_info(f"Published as {remote.public_link(saved.slug)}")
        return saved

    def public_link(self) -> Optional[str]:
        slug = self.save_status.slug
        if slug is None or self.remote_store is None:
            return None
        return self.remote_store.public_link(slug)
