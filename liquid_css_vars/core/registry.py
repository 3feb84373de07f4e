"""CSS variable registry.

During a scan a ``RegistryBuilder`` collects declarations with
first-write-wins semantics per variable name. ``freeze()`` turns it into an
immutable ``VariableRegistry`` that is published as a whole.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MediaVariant:
    """Value of a variable inside one ``@media`` rule."""

    query: str
    value: str


@dataclass(frozen=True)
class CssVariableEntry:
    """A registered custom property.

    Attributes:
        name: Property name including the leading ``--``.
        value: Base value (first declaration seen).
        source_file: Full path of the file that declared it first.
        media: Media-query variants in discovery order.
    """

    name: str
    value: str
    source_file: str
    media: tuple[MediaVariant, ...] = ()

    @property
    def file(self) -> str:
        """Base name of the declaring file."""
        return Path(self.source_file).name

    def to_dict(self) -> dict[str, object]:
        return {
            "value": self.value,
            "file": self.file,
            "source_file": self.source_file,
            "media": [{"query": m.query, "value": m.value} for m in self.media],
        }


@dataclass
class _PendingEntry:
    value: str
    source_file: str
    media: list[MediaVariant] = field(default_factory=list)


class RegistryBuilder:
    """Mutable accumulator used while a scan is running."""

    def __init__(self) -> None:
        self._entries: dict[str, _PendingEntry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def declare(
        self,
        name: str,
        value: str,
        source_file: str,
        media_query: str | None = None,
    ) -> bool:
        """Record a declaration.

        The first declaration of a name sets its base value. A later
        declaration of a known name only adds a media variant (when made
        inside ``@media``) and is otherwise ignored.

        Returns:
            True when the name was new.
        """
        existing = self._entries.get(name)
        if existing is None:
            media = [MediaVariant(media_query, value)] if media_query else []
            self._entries[name] = _PendingEntry(value, source_file, media)
            return True
        if media_query:
            existing.media.append(MediaVariant(media_query, value))
        return False

    def freeze(self) -> VariableRegistry:
        return VariableRegistry({
            name: CssVariableEntry(name, pending.value, pending.source_file, tuple(pending.media))
            for name, pending in self._entries.items()
        })


class VariableRegistry(Mapping[str, CssVariableEntry]):
    """Read-only mapping of ``--name`` to its entry, in discovery order."""

    def __init__(self, entries: Mapping[str, CssVariableEntry] | None = None) -> None:
        self._entries: dict[str, CssVariableEntry] = dict(entries or {})

    def __getitem__(self, name: str) -> CssVariableEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"VariableRegistry({len(self._entries)} variables)"

    def source_files(self) -> list[str]:
        """Distinct declaring files, in first-seen order."""
        return list(dict.fromkeys(entry.source_file for entry in self._entries.values()))

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {name: entry.to_dict() for name, entry in self._entries.items()}
