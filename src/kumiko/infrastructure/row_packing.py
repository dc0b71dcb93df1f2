"""Kerf-adjusted row packing of placed strips.

A group's stock is laid out as rows of one strip width each. Pieces on a
row are cut end to end with one tool width (kerf) between neighbours, so
their requested x offsets are only used for ordering: packing re-sorts
each row by x and repositions pieces at a running offset.

All dataclasses are frozen; the packer returns fresh pieces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Sequence

from kumiko.domain.constants import DEFAULT_BIT_SIZE, DEFAULT_STOCK_LENGTH, GRID_CELL_HEIGHT
from kumiko.domain.entities import Group
from kumiko.domain.value_objects import DesignStrip, Piece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowPackingConfig:
    """Configuration for row packing.

    Attributes:
        bit_size: Cutting tool diameter in mm, used as kerf between strips.
        stock_length: Nominal board length in mm.
        row_height: Width of one row of stock in mm.
    """

    bit_size: float = DEFAULT_BIT_SIZE
    stock_length: float = DEFAULT_STOCK_LENGTH
    row_height: float = GRID_CELL_HEIGHT

    def __post_init__(self) -> None:
        if self.bit_size <= 0:
            raise ValueError("Bit size must be positive")
        if self.stock_length <= 0:
            raise ValueError("Stock length must be positive")
        if self.row_height <= 0:
            raise ValueError("Row height must be positive")


@dataclass(frozen=True)
class RowOverflow:
    """A piece that runs past the usable stock length."""

    piece_id: str
    row_index: int
    end: float


@dataclass(frozen=True)
class PackedGroup:
    """Result of packing one group.

    Attributes:
        rows: Kerf-adjusted pieces per row index, sorted by row.
        row_lengths: Occupied length per row, without trailing kerf.
        total_strip_length: Sum of all placed strip lengths in mm.
        overflows: Pieces whose end exceeds the stock length allowance.
        orphaned_piece_ids: Pieces referencing strips that no longer exist.
    """

    rows: dict[int, tuple[Piece, ...]]
    row_lengths: dict[int, float]
    total_strip_length: float
    overflows: tuple[RowOverflow, ...] = ()
    orphaned_piece_ids: tuple[str, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def piece_count(self) -> int:
        return sum(len(pieces) for pieces in self.rows.values())

    @property
    def fits_stock(self) -> bool:
        return not self.overflows


def _strip_lengths(strips: Iterable[DesignStrip]) -> dict[str, float]:
    return {strip.id: strip.length_mm for strip in strips}


def compute_kerfed_layout_rows(
    pieces: Iterable[Piece],
    strips: Sequence[DesignStrip] | Mapping[str, float],
    bit_size: float,
) -> dict[int, list[Piece]]:
    """Reposition pieces per row at kerf-separated offsets.

    Each row is sorted by requested x, then every piece is moved to the
    running offset, which advances by ``strip length + bit_size``. Pieces
    whose strip is unknown are skipped.

    Args:
        pieces: Pieces of one group.
        strips: Derived strips, or a mapping of strip id to length.
        bit_size: Kerf between adjacent pieces.

    Returns:
        Adjusted pieces keyed by row index, rows in first-seen order.
    """
    lengths = strips if isinstance(strips, Mapping) else _strip_lengths(strips)

    rows: dict[int, list[Piece]] = {}
    for piece in pieces:
        rows.setdefault(piece.row_index, []).append(piece)

    adjusted: dict[int, list[Piece]] = {}
    for row_index, row_pieces in rows.items():
        current_x = 0.0
        placed: list[Piece] = []
        for piece in sorted(row_pieces, key=lambda p: p.x):
            length = lengths.get(piece.line_id)
            if length is None:
                continue
            placed.append(replace(piece, x=current_x))
            current_x += length + bit_size
        adjusted[row_index] = placed

    return adjusted


def compute_row_lengths(
    layout_rows: Mapping[int, Sequence[Piece]],
    strips: Sequence[DesignStrip] | Mapping[str, float],
) -> dict[int, float]:
    """Occupied length of each row: last piece x plus its length."""
    lengths = strips if isinstance(strips, Mapping) else _strip_lengths(strips)

    row_lengths: dict[int, float] = {}
    for row_index, row_pieces in layout_rows.items():
        row_length = 0.0
        if row_pieces:
            last = row_pieces[-1]
            length = lengths.get(last.line_id)
            if length is not None:
                row_length = last.x + length
        row_lengths[row_index] = row_length
    return row_lengths


def validate_strip_placement(
    strip_length: float,
    start_position: float,
    stock_length: float,
    strip_width: float,
) -> bool:
    """Check that a strip placed at ``start_position`` fits the stock.

    The strip may overhang the stock length by at most half its width.
    """
    strip_end = start_position + strip_length
    return strip_end <= stock_length + strip_width / 2


def next_row_position(
    group: Group,
    row_index: int,
    strips: Sequence[DesignStrip],
    bit_size: float,
) -> float:
    """X offset at which a strip appended to a row would start."""
    return group.row_end(row_index, _strip_lengths(strips), bit_size)


class KerfRowPacker:
    """Packs the pieces of a group into kerf-separated rows.

    Attributes:
        config: Tool, stock and row dimensions.
    """

    def __init__(self, config: RowPackingConfig | None = None) -> None:
        self.config = config or RowPackingConfig()

    def pack(self, group: Group, strips: Sequence[DesignStrip]) -> PackedGroup:
        """Pack one group.

        Args:
            group: Group whose pieces are packed.
            strips: Current design strips.

        Returns:
            PackedGroup with adjusted rows, row lengths and overflows.
        """
        lengths = _strip_lengths(strips)
        orphaned = tuple(
            piece.id for piece in group.pieces.values() if piece.line_id not in lengths
        )
        if orphaned:
            logger.warning(
                f"Group {group.id}: skipping {len(orphaned)} piece(s) with no matching strip"
            )

        rows = compute_kerfed_layout_rows(group.pieces.values(), lengths, self.config.bit_size)
        rows = {index: rows[index] for index in sorted(rows)}
        row_lengths = compute_row_lengths(rows, lengths)

        overflows: list[RowOverflow] = []
        total = 0.0
        for row_index, row_pieces in rows.items():
            for piece in row_pieces:
                length = lengths[piece.line_id]
                total += length
                if not validate_strip_placement(
                    length, piece.x, self.config.stock_length, self.config.row_height
                ):
                    overflows.append(
                        RowOverflow(piece_id=piece.id, row_index=row_index, end=piece.x + length)
                    )

        logger.debug(
            f"Packed group {group.id}: {len(rows)} rows, {total:.1f} mm of strip, "
            f"{len(overflows)} overflow(s)"
        )

        return PackedGroup(
            rows={index: tuple(pieces) for index, pieces in rows.items()},
            row_lengths=row_lengths,
            total_strip_length=total,
            overflows=tuple(overflows),
            orphaned_piece_ids=orphaned,
        )
