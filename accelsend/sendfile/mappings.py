"""Prefix mappings translating local file paths into proxy locations.

nginx only serves ``X-Accel-Redirect`` targets from its own URI namespace,
so ``/var/www/uploads/a.txt`` has to become e.g. ``/protected/a.txt``.
A table maps internal path prefixes to external ones; the first matching
entry in table order wins.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from accelsend.core.errors import ConfigurationError


@dataclass(frozen=True)
class AccelMapping:
    """Single ``internal=external`` prefix rewrite rule."""

    internal: str
    external: str

    def rewrite(self, path: str) -> str | None:
        """Return ``path`` with the internal prefix replaced, or None."""
        if not path.startswith(self.internal):
            return None
        return self.external + path[len(self.internal) :]

    def __str__(self) -> str:
        return f"{self.internal}={self.external}"


@dataclass(frozen=True)
class AccelMappings:
    """Ordered, immutable mapping table."""

    entries: tuple[AccelMapping, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        pairs: "AccelMappings | Mapping[str, str] | Iterable[tuple[str, str] | AccelMapping]",
    ) -> "AccelMappings":
        """Build a table from pairs, keeping their order.

        Accepts a dict (insertion order), an iterable of ``(internal, external)``
        tuples or ``AccelMapping`` instances.

        Raises:
            ConfigurationError: If an entry has an empty internal prefix
        """
        if isinstance(pairs, AccelMappings):
            return pairs

        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        entries: list[AccelMapping] = []
        for item in items:
            mapping = item if isinstance(item, AccelMapping) else AccelMapping(*item)
            if not mapping.internal:
                raise ConfigurationError(
                    "Accel mapping has an empty internal prefix",
                    details={"external": mapping.external},
                )
            entries.append(mapping)
        return cls(entries=tuple(entries))

    def resolve(self, path: str) -> str | None:
        """Translate ``path`` with the first matching entry.

        Returns:
            The external location, or None when no internal prefix matches
        """
        for mapping in self.entries:
            location = mapping.rewrite(path)
            if location is not None:
                return location
        return None

    def __iter__(self) -> Iterator[AccelMapping]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __str__(self) -> str:
        return ",".join(str(mapping) for mapping in self.entries)


def parse_mapping_entry(entry: str) -> AccelMapping | None:
    """Parse one ``internal=external`` entry.

    The entry is split on the first ``=`` and both sides are stripped.
    Returns None for entries without ``=`` or with an empty internal prefix.
    """
    internal, sep, external = entry.partition("=")
    internal = internal.strip()
    if not sep or not internal:
        return None
    return AccelMapping(internal=internal, external=external.strip())


def parse_mapping_header(value: str | None) -> AccelMappings:
    """Parse an ``X-Accel-Mapping`` header value.

    Never raises: invalid entries are skipped, so a malformed or empty
    header produces an empty table.
    """
    if not value:
        return AccelMappings()

    entries = []
    for entry in value.split(","):
        mapping = parse_mapping_entry(entry)
        if mapping is not None:
            entries.append(mapping)
    return AccelMappings(entries=tuple(entries))
