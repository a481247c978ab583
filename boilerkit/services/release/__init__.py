"""Release notes, version bumps and GitHub releases."""

from .errors import NotesError, ReleaseError
from .notes import ExtractedNotes, NotesService, extract_latest_release, fallback_notes
from .semver import ReleaseType, SemVer, parse_version, resolve_release_type
from .service import ReleaseService

__all__ = [
    "ExtractedNotes",
    "NotesError",
    "NotesService",
    "ReleaseError",
    "ReleaseService",
    "ReleaseType",
    "SemVer",
    "extract_latest_release",
    "fallback_notes",
    "parse_version",
    "resolve_release_type",
]
