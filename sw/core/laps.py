"""Append-only ledger of recorded lap times."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LapEntry:
    index: int
    label: str


class LapLedger:
    """Ordered laps numbered 1..N with no gaps.

    Only ``clear()`` (driven by a stopwatch reset) removes entries, and
    ``restore()`` rebuilds the ledger from persisted labels.
    """

    def __init__(self):
        self._entries = []

    @property
    def entries(self):
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def record(self, label):
        entry = LapEntry(index=len(self._entries) + 1, label=str(label))
        self._entries.append(entry)
        return entry

    def clear(self):
        self._entries.clear()

    def restore(self, labels):
        """Replace all entries with ``labels``, renumbered from 1 in order."""
        self._entries = [LapEntry(index=i, label=str(label)) for i, label in enumerate(labels, start=1)]

    def labels(self):
        return [e.label for e in self._entries]
