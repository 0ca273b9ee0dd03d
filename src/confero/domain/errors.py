from __future__ import annotations

from typing import Optional, Sequence


class ConferoError(Exception):
    """Base error for the site generator."""


class ConfigurationError(ConferoError):
    pass


class SpaceCatalogError(ConferoError):
    pass


class RenderError(ConferoError):
    pass


class ContentLoadError(ConferoError):
    """
    A post could not be turned into a valid Post.

    source names the offending entry (file path or memory:// uri),
    field names the frontmatter key at fault when one is known.
    """

    def __init__(self, source: str, message: str, *, field: Optional[str] = None) -> None:
        self.source = source
        self.field = field
        self.reason = message
        where = f"{source} [{field}]" if field else source
        super().__init__(f"{where}: {message}")


class InvalidSpaceReferenceError(ContentLoadError):
    pass


class InvalidTagFormatError(ContentLoadError):
    pass


class DuplicateSlugError(ContentLoadError):
    pass


class ContentValidationFailed(ContentLoadError):
    """
    Raised once per build with every rejected entry attached.

    source/field mirror the first error so callers that only catch
    ContentLoadError still get a useful location.
    """

    def __init__(self, errors: Sequence[ContentLoadError]) -> None:
        if not errors:
            raise ValueError("ContentValidationFailed needs at least one error")
        self.errors = tuple(errors)
        first = self.errors[0]
        self.source = first.source
        self.field = first.field
        self.reason = first.reason
        noun = "entry" if len(self.errors) == 1 else "entries"
        lines = [f"{len(self.errors)} invalid content {noun}:"]
        lines.extend(f"  - {e}" for e in self.errors)
        ConferoError.__init__(self, "\n".join(lines))
