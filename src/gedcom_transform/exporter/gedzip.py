"""
gedzip.py
GEDCOM 7.0 GEDZIP bundling.

A GEDZIP archive is a zip file holding the dataset as ``gedcom.ged`` at its
root plus any local media files under the relative paths the OBJE FILE
lines reference.
"""

from __future__ import annotations

import io
import zipfile
from pathlib import PurePosixPath
from typing import Any, Mapping, Optional

from gedcom_transform.core.exceptions import MediaBundleError
from gedcom_transform.exporter.gedcom_writer import generate_gedcom
from gedcom_transform.logging import get_logger
from gedcom_transform.registry.entities import Document

log = get_logger(__name__)

GEDZIP_DATASET_NAME = "gedcom.ged"


def _archive_path(path: str) -> str:
    normalized = PurePosixPath(path.replace("\\", "/"))
    if normalized.is_absolute() or ".." in normalized.parts or not normalized.parts:
        raise MediaBundleError(f"Media path must be relative and inside the archive: {path!r}")
    if str(normalized) == GEDZIP_DATASET_NAME:
        raise MediaBundleError(f"Media path collides with the dataset file: {path!r}")
    return str(normalized)


def generate_gedzip(
    document: Document,
    media_files: Optional[Mapping[str, bytes]] = None,
    **generate_kwargs: Any,
) -> bytes:
    """
    Build a GEDZIP archive (bytes) for `document`, always as GEDCOM 7.0.

    Args:
        document: the Document to encode.
        media_files: relative path -> file content for every media payload to
            ship alongside the dataset.
        generate_kwargs: forwarded to `generate_gedcom` (source_name, today...).
    """
    media_files = media_files or {}
    text = generate_gedcom(document, "7.0", **generate_kwargs)

    referenced = {m.path.replace("\\", "/") for m in document.media if m.path}

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(GEDZIP_DATASET_NAME, text.encode("utf-8"))
        for path, payload in media_files.items():
            name = _archive_path(path)
            if name not in referenced:
                log.debug("Bundling media file not referenced by any OBJE record: %s", name)
            archive.writestr(name, payload)

    log.debug("GEDZIP built: %d media files", len(media_files))
    return buffer.getvalue()
