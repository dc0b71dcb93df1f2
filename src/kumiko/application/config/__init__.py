"""Design file schema, loading, merging and validation.

Public API:
    - DesignConfiguration: Root design file model
    - load_design: Load a design from a JSON file
    - load_design_from_dict: Load a design from a dictionary
    - ConfigError: Exception for design file errors
    - config_to_design / design_to_payload: Convert to and from domain state
    - merge_design_with_cli: Apply command line overrides
    - validate_design: Structural and geometric checks

Example:
    >>> from pathlib import Path
    >>> from kumiko.application.config import load_design, ConfigError
    >>>
    >>> try:
    ...     config = load_design(Path("asanoha.json"))
    ...     print(f"{len(config.lines)} lines, bit {config.bit_size} mm")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from kumiko.application.config.adapter import (
    config_to_design,
    design_to_config,
    design_to_payload,
)
from kumiko.application.config.loader import (
    ConfigError,
    load_design,
    load_design_from_dict,
)
from kumiko.application.config.merger import merge_design_with_cli
from kumiko.application.config.schema import (
    CutConfig,
    DesignConfiguration,
    GridViewStateConfig,
    GroupConfig,
    LineConfig,
    PieceConfig,
)
from kumiko.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_design,
)

__all__ = [
    # Schema
    "CutConfig",
    "DesignConfiguration",
    "GridViewStateConfig",
    "GroupConfig",
    "LineConfig",
    "PieceConfig",
    # Loading
    "ConfigError",
    "load_design",
    "load_design_from_dict",
    # Conversion
    "config_to_design",
    "design_to_config",
    "design_to_payload",
    "merge_design_with_cli",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_design",
]
