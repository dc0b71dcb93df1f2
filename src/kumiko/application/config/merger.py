"""Configuration merging utilities for CLI override support.

Precedence: CLI args > design file values > defaults. Only non-None CLI
arguments override design values.
"""

from typing import Any

from kumiko.application.config.loader import load_design_from_dict
from kumiko.application.config.schema import DesignConfiguration


def merge_design_with_cli(
    config: DesignConfiguration,
    *,
    bit_size: float | None = None,
    stock_length: float | None = None,
    grid_cell_size: float | None = None,
) -> DesignConfiguration:
    """Merge CLI arguments with design file values.

    Args:
        config: The loaded design
        bit_size: Override for bitSize (if not None)
        stock_length: Override for stockLength (if not None)
        grid_cell_size: Override for gridCellSize (if not None)

    Returns:
        A new, revalidated DesignConfiguration with merged values

    Raises:
        ConfigError: If an override is out of range (e.g. a negative bit size)

    Example:
        >>> config = load_design(Path("asanoha.json"))
        >>> merged = merge_design_with_cli(config, bit_size=3.175)
        >>> merged.bit_size
        3.175
    """
    overrides: dict[str, Any] = {}
    if bit_size is not None:
        overrides["bit_size"] = bit_size
    if stock_length is not None:
        overrides["stock_length"] = stock_length
    if grid_cell_size is not None:
        overrides["grid_cell_size"] = grid_cell_size

    if not overrides:
        return config

    data = config.model_dump()
    data.update(overrides)
    return load_design_from_dict(data)
