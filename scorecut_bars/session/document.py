"""
Bar Document
============

Accumulates the bar boxes of every cut system, page by page.

Design:
- Mutable accumulator (BarDocument), immutable records (SystemCut)
- Running offsets for index_in_page / index_in_document
- JSON persistence via to_dict()/from_dict()
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from scorecut_bars.partition.barbox import BarBox

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class SystemCut:
    """
    Bar boxes of one system.

    Attributes:
        page_number: Page the system is on
        bars: Bar boxes in row order
        row_length: Number of break points used (skipped bars included), so
            offsets stay aligned with index_in_row
    """

    page_number: int
    bars: Tuple[BarBox, ...]
    row_length: int

    def __post_init__(self):
        object.__setattr__(self, 'bars', tuple(self.bars))
        if self.row_length < len(self.bars):
            raise ValueError(
                f"row_length ({self.row_length}) cannot be smaller than "
                f"the number of bars ({len(self.bars)})"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'page_number': self.page_number,
            'row_length': self.row_length,
            'bars': [bar.to_dict() for bar in self.bars],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SystemCut':
        try:
            bars = tuple(BarBox.from_dict(bar) for bar in data['bars'])
            return cls(
                page_number=int(data['page_number']),
                bars=bars,
                row_length=int(data.get('row_length', len(bars))),
            )
        except KeyError as e:
            raise ValueError(f"Missing required SystemCut field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid SystemCut data: {e}")


class BarDocument:
    """
    Ordered collection of cut systems.

    Usage:
        document = BarDocument()
        offset_page = document.next_index_in_page(page_number=1)
        offset_doc = document.next_index_in_document
        bars = make_bar_boxes_from_active_bar_cut(..., offset_page, offset_doc)
        document.add_system(1, bars, row_length=len(break_points))
    """

    def __init__(self):
        self._systems: List[SystemCut] = []

    def add_system(
        self,
        page_number: int,
        bars: List[BarBox],
        row_length: Optional[int] = None,
    ) -> SystemCut:
        """
        Append the bars of one system.

        Args:
            page_number: Page the system is on
            bars: Bar boxes in row order
            row_length: Break points used (default: number of bars)

        Returns:
            The stored SystemCut record
        """
        system = SystemCut(
            page_number=page_number,
            bars=tuple(bars),
            row_length=len(bars) if row_length is None else row_length,
        )
        self._systems.append(system)
        return system

    def systems(self, page_number: Optional[int] = None) -> List[SystemCut]:
        """Systems in insertion order, optionally for one page only."""
        if page_number is None:
            return list(self._systems)
        return [s for s in self._systems if s.page_number == page_number]

    @property
    def pages(self) -> List[int]:
        """Page numbers that hold at least one system, in ascending order."""
        return sorted({s.page_number for s in self._systems})

    def bars(self) -> Iterator[BarBox]:
        for system in self._systems:
            yield from system.bars

    @property
    def bar_count(self) -> int:
        return sum(len(s.bars) for s in self._systems)

    @property
    def next_index_in_document(self) -> int:
        return sum(s.row_length for s in self._systems)

    def next_index_in_page(self, page_number: int) -> int:
        return sum(s.row_length for s in self._systems if s.page_number == page_number)

    def __len__(self) -> int:
        return len(self._systems)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': SCHEMA_VERSION,
            'systems': [system.to_dict() for system in self._systems],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BarDocument':
        """
        Deserialize from dict.

        Raises:
            ValueError: On unknown schema version or malformed content
        """
        version = data.get('schema_version')
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported bar document schema version: {version!r}")
        document = cls()
        for system_data in data.get('systems', []):
            document._systems.append(SystemCut.from_dict(system_data))
        return document

    def save_json(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @classmethod
    def load_json(cls, path: Path) -> 'BarDocument':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Bar document not found: {path}")
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return f"BarDocument(systems={len(self._systems)}, bars={self.bar_count})"
