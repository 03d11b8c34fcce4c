"""Container-scoped blob addresses."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from azblobfs.exceptions import InvalidPathError


if TYPE_CHECKING:
    from collections.abc import Sequence


SEP = "/"

# One-letter schemes are most likely Windows drive letters.
_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]{1,35}:")


def is_likely_uri(s: str) -> bool:
    """Whether the string starts with something that looks like a URI scheme."""
    return bool(_URI_SCHEME.match(s))


def split_path(path: str) -> list[str]:
    """Split an abstract path on the separator. The empty path has no parts."""
    return path.split(SEP) if path else []


def validate_path_parts(parts: Sequence[str]) -> str | None:
    """Return an error message for the first invalid component, or None."""
    for part in parts:
        if not part:
            return "Empty path component"
        if part in {".", ".."}:
            return f"Relative path component '{part}' is not allowed"
    return None


@dataclass(frozen=True, eq=False)
class BlobAddress:
    """A container plus the blob path inside it.

    Example: ``testcontainer/testdir/testfile.txt`` has container
    ``testcontainer``, relative path ``testdir/testfile.txt`` and
    segments ``("testdir", "testfile.txt")``.

    Direct construction is validated the same way as `from_string`.
    """

    full_path: str
    container: str
    relative_path: str = ""
    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.full_path.endswith(SEP):
            msg = f"Address cannot end with a separator ('{self.full_path}')"
            raise InvalidPathError(msg)
        if SEP in self.container:
            msg = f"Container name cannot contain a separator ('{self.container}')"
            raise InvalidPathError(msg)
        if not self.relative_path:
            if self.segments or self.full_path != self.container:
                msg = f"Address '{self.full_path}' does not match container '{self.container}'"
                raise InvalidPathError(msg)
            return
        if not self.container:
            msg = f"Path cannot start with a separator ('{self.full_path}')"
            raise InvalidPathError(msg)
        if self.full_path != f"{self.container}{SEP}{self.relative_path}":
            expected = f"{self.container}{SEP}{self.relative_path}"
            msg = f"Address '{self.full_path}' does not match '{expected}'"
            raise InvalidPathError(msg)
        if self.segments != tuple(split_path(self.relative_path)):
            msg = f"Segments {self.segments!r} do not match relative path '{self.relative_path}'"
            raise InvalidPathError(msg)
        if problem := validate_path_parts(self.segments):
            msg = f"{problem} in path {self.full_path}"
            raise InvalidPathError(msg)

    @classmethod
    def from_string(cls, s: str) -> BlobAddress:
        """Parse and validate a ``container[/path...]`` string.

        Raises:
            InvalidPathError: If the string is a URI, starts with a separator
                or has empty / relative components.
        """
        if is_likely_uri(s):
            msg = f"Expected an Azure object path of the form 'container/path...', got a URI: '{s}'"
            raise InvalidPathError(msg)
        src = s.rstrip(SEP)
        first_sep = src.find(SEP)
        if first_sep == 0:
            msg = f"Path cannot start with a separator ('{s}')"
            raise InvalidPathError(msg)
        if first_sep == -1:
            return cls(full_path=src, container=src)
        relative = src[first_sep + 1 :]
        return cls(
            full_path=src,
            container=src[:first_sep],
            relative_path=relative,
            segments=tuple(split_path(relative)),
        )

    @property
    def has_parent(self) -> bool:
        return bool(self.relative_path)

    @property
    def empty(self) -> bool:
        return not self.container and not self.relative_path

    def parent(self) -> BlobAddress:
        """Address one level up. Only valid when `has_parent` is true."""
        if not self.has_parent:
            msg = f"Address '{self.full_path}' has no parent"
            raise ValueError(msg)
        segments = self.segments[:-1]
        relative = SEP.join(segments)
        full_path = f"{self.container}{SEP}{relative}" if relative else self.container
        return BlobAddress(
            full_path=full_path,
            container=self.container,
            relative_path=relative,
            segments=segments,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlobAddress):
            return NotImplemented
        return (self.container, self.relative_path) == (other.container, other.relative_path)

    def __hash__(self) -> int:
        return hash((self.container, self.relative_path))

    def __str__(self) -> str:
        return self.full_path
