"""Domain entities for strip layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from .constants import DEFAULT_GROUP_ID, DEFAULT_GROUP_NAME
from .value_objects import Cut, Piece, new_id

logger = logging.getLogger(__name__)


@dataclass
class Group:
    """One independently exportable board of placed strips.

    Attributes:
        id: Group identifier.
        name: Display name.
        pieces: Placed pieces keyed by id, in placement order.
        full_cuts: Manual full-depth cuts from legacy layouts.
    """

    id: str
    name: str
    pieces: dict[str, Piece] = field(default_factory=dict)
    full_cuts: dict[str, Cut] = field(default_factory=dict)

    def row_pieces(self, row_index: int) -> list[Piece]:
        """Pieces on one row, sorted by x."""
        return sorted(
            (p for p in self.pieces.values() if p.row_index == row_index),
            key=lambda p: p.x,
        )

    def row_indices(self) -> list[int]:
        return sorted({p.row_index for p in self.pieces.values()})

    def row_end(
        self,
        row_index: int,
        strip_lengths: Mapping[str, float],
        kerf: float,
    ) -> float:
        """Offset at which a new piece would be appended to a row.

        The end is the last piece's x plus its strip length plus one kerf.
        An empty row, or one whose last piece references an unknown strip,
        starts at 0.
        """
        pieces = self.row_pieces(row_index)
        if not pieces:
            return 0.0
        last = pieces[-1]
        length = strip_lengths.get(last.line_id)
        if length is None:
            return 0.0
        return last.x + length + kerf


@dataclass
class Layout:
    """All groups of a design plus the active group.

    There is always at least one group. A fresh layout holds a single
    ``Default Group`` with id ``group1``.
    """

    groups: dict[str, Group] = field(default_factory=dict)
    active_group_id: str = DEFAULT_GROUP_ID
    id_factory: Callable[[], str] = field(default=new_id, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.groups:
            self.reset()
        elif self.active_group_id not in self.groups:
            self.active_group_id = next(iter(self.groups))

    @property
    def active_group(self) -> Group:
        return self.groups[self.active_group_id]

    def get_group(self, group_id: str) -> Group:
        """Look up a group.

        Raises:
            KeyError: If no group has that id.
        """
        try:
            return self.groups[group_id]
        except KeyError:
            raise KeyError(f"Unknown group: {group_id}") from None

    def add_group(self) -> Group:
        """Add an empty group named ``Group N`` and make it active."""
        group_id = self.id_factory()
        group = Group(id=group_id, name=f"Group {len(self.groups) + 1}")
        self.groups[group_id] = group
        self.active_group_id = group_id
        return group

    def delete_group(self, group_id: str) -> bool:
        """Delete a group.

        Returns:
            False when the group is unknown or is the last one left.
        """
        if group_id not in self.groups:
            return False
        if len(self.groups) <= 1:
            logger.warning("Cannot delete the last group.")
            return False
        del self.groups[group_id]
        if self.active_group_id == group_id:
            self.active_group_id = next(iter(self.groups))
        return True

    def rename_group(self, group_id: str, name: str) -> bool:
        """Rename a group; blank names are ignored."""
        trimmed = name.strip()
        group = self.groups.get(group_id)
        if not trimmed or group is None:
            return False
        group.name = trimmed
        return True

    def place_piece(
        self,
        group_id: str,
        strip_id: str,
        row_index: int = 0,
        x: float | None = None,
        strip_lengths: Mapping[str, float] | None = None,
        kerf: float = 0.0,
    ) -> Piece:
        """Place a strip on a row of a group.

        Args:
            group_id: Target group.
            strip_id: DesignStrip.id to place.
            row_index: Target row.
            x: Requested offset. When omitted the piece is appended after
                the last piece of the row.
            strip_lengths: Strip lengths by id, used to find the row end.
            kerf: Spacing added after the last piece when appending.

        Returns:
            The new Piece.
        """
        group = self.get_group(group_id)
        if x is None:
            x = group.row_end(row_index, strip_lengths or {}, kerf)
        piece = Piece(
            id=self.id_factory(),
            line_id=strip_id,
            x=x,
            y=0.0,
            row_index=row_index,
        )
        group.pieces[piece.id] = piece
        return piece

    def delete_piece(self, group_id: str, piece_id: str) -> bool:
        group = self.get_group(group_id)
        return group.pieces.pop(piece_id, None) is not None

    def clear_group(self, group_id: str) -> None:
        group = self.get_group(group_id)
        group.pieces.clear()
        group.full_cuts.clear()

    def reset(self) -> None:
        """Return to a single empty default group."""
        self.groups = {
            DEFAULT_GROUP_ID: Group(id=DEFAULT_GROUP_ID, name=DEFAULT_GROUP_NAME)
        }
        self.active_group_id = DEFAULT_GROUP_ID
