"""PDF inspection helpers."""

import io
from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader


def page_count(pdf: Union[Path, bytes]) -> Optional[int]:
    """Get page count from a PDF path or in-memory bytes, or None if unreadable."""
    try:
        source = io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)
        reader = PdfReader(source)
        return len(reader.pages)
    except Exception:
        return None
