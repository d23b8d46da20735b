"""
Remote resume store client.

Consumes the publish API:
    GET  /api/public/{slug}  -> {"data": <document>}
    POST /api/resumes        {"id"?, "data", "title"} -> {"id", "slug"} | {"error"}

Loads degrade silently to None; saves raise RemoteSaveError with a message fit
to show the user. Every call is a single attempt.
"""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlsplit

import httpx
from dotenv import load_dotenv

from resume_maker.contexts.editing.document import Document
from resume_maker.contexts.editing.exceptions import DocumentFormatError
from resume_maker.contexts.persistence.exceptions import RemoteSaveError
from resume_maker.contexts.persistence.logger import _log_debug, _log_info, _log_warning

load_dotenv()
API_URL = os.getenv("RESUME_MAKER_API_URL", "http://localhost:3000")

PUBLIC_PATH_PREFIX = "/p/"
SAVE_FALLBACK_MESSAGE = "Failed to save"


@dataclass(frozen=True)
class SavedResume:
    """Identifiers assigned by the server to a saved resume."""

    id: str
    slug: str


def slug_from_location(location: Optional[str]) -> Optional[str]:
    """
    Extract the slug from a public location ("/p/{slug}" path or full URL).

    Returns:
        The slug, or None when the location is not a public link
    """
    if not location:
        return None
    path = urlsplit(location).path
    if not path.startswith(PUBLIC_PATH_PREFIX):
        return None
    slug = path[len(PUBLIC_PATH_PREFIX):].strip("/")
    return slug or None


def resume_title(document: Document) -> str:
    return f"{document.profile.name} - Resume"


class RemoteStore:
    """
    HTTP client for the remote resume store.

    Args:
        base_url: API origin (defaults to RESUME_MAKER_API_URL)
        client: Preconfigured httpx.Client (e.g., with a mock transport)
        timeout: Request timeout in seconds for the default client
    """

    def __init__(self, base_url: str = None, client: httpx.Client = None, timeout: float = 10.0):
        self.base_url = (base_url or API_URL).rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def public_link(self, slug: str) -> str:
        return f"{self.base_url}{PUBLIC_PATH_PREFIX}{slug}"

    def load(self, slug: str) -> Optional[Document]:
        """
        Fetch a published document by slug.

        Returns:
            The Document, or None on any failure (transport error, non-2xx
            response, or malformed payload)
        """
        url = f"{self.base_url}/api/public/{quote(slug, safe='')}"
        _log_debug(f"GET {url}")

        try:
            response = self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            _log_warning(f"Could not reach remote store for '{slug}': {e}")
            return None

        if not response.is_success:
            _log_warning(f"Public resume '{slug}' not loaded: HTTP {response.status_code}")
            return None

        try:
            payload = response.json()
        except ValueError:
            _log_warning(f"Public resume '{slug}' returned a non-JSON body")
            return None

        data = payload.get("data") if isinstance(payload, dict) else None
        if not data:
            _log_warning(f"Public resume '{slug}' returned no document")
            return None

        try:
            document = Document.from_dict(data)
        except DocumentFormatError as e:
            _log_warning(f"Public resume '{slug}' is malformed: {e}")
            return None

        _log_info(f"Loaded public resume '{slug}'")
        return document

    def save(self, existing_id: Optional[str], document: Document, title: str) -> SavedResume:
        """
        Create or update a resume on the server.

        Args:
            existing_id: Id from a previous save; omitted from the request when None
            document: Document to publish
            title: Display title (conventionally "{name} - Resume")

        Returns:
            SavedResume with the server-assigned id and public slug

        Raises:
            RemoteSaveError: With the server's error message, or "Failed to save"
        """
        body = {"data": document.to_dict(), "title": title}
        if existing_id:
            body = {"id": existing_id, **body}

        url = f"{self.base_url}/api/resumes"
        _log_debug(f"POST {url} (id: {existing_id or 'new'})")

        try:
            response = self.client.post(url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteSaveError(SAVE_FALLBACK_MESSAGE, original_error=e) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteSaveError(
                SAVE_FALLBACK_MESSAGE, status_code=response.status_code, original_error=e
            ) from e

        if not isinstance(payload, dict):
            payload = {}

        if response.is_success and payload.get("id") and payload.get("slug"):
            saved = SavedResume(id=str(payload["id"]), slug=str(payload["slug"]))
            _log_info(f"Saved resume '{title}' as {saved.slug}")
            return saved

        message = payload.get("error") or SAVE_FALLBACK_MESSAGE
        raise RemoteSaveError(str(message), status_code=response.status_code)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RemoteStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
