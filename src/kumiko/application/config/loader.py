"""Design document loader.

Reads a saved kumiko design (a JSON object with ``version: 1``), checks the
format version and the intersection override pairs before schema validation,
and reports every failure as a ConfigError whose ``error_type`` names the
stage that rejected the document.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from kumiko.application.config.schema import DesignConfiguration

SUPPORTED_VERSION = 1
OVERRIDE_KEYS = ("intersectionStates", "intersection_states")


class ConfigError(Exception):
    """Exception raised for design document errors.

    Attributes:
        message: The primary error message
        error_type: Stage that rejected the document (file_not_found,
            permission_denied, file_read_error, json_parse, not_an_object,
            unsupported_version, overrides, validation)
        path: Path to the design file, None for in-memory documents
        details: Per-problem dictionaries (line/column for JSON, a ``path``
            and ``message`` for everything else)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _field_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic location as ``groups[0].pieces[2].rowIndex``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path = f"{path}.{segment}" if path else str(segment)
    return path


def _schema_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _field_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _summarize(heading: str, details: list[dict[str, Any]]) -> str:
    lines = [heading]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _check_version(data: Any, path: Path | None) -> None:
    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Design document must be a JSON object, got {type(data).__name__}",
            error_type="not_an_object",
            path=path,
        )
    version = data.get("version", SUPPORTED_VERSION)
    # bool is an int subclass, so True would otherwise pass as 1
    if isinstance(version, bool) or version != SUPPORTED_VERSION:
        raise ConfigError(
            message=f"Unsupported design version {version!r}; expected {SUPPORTED_VERSION}",
            error_type="unsupported_version",
            path=path,
            details=[{"path": "version", "message": "unsupported version", "value": version}],
        )


def _normalize_overrides(data: dict[str, Any], path: Path | None) -> dict[str, Any]:
    """Coerce intersection overrides into ``[id, line1Over]`` pairs.

    Saved designs store the pairs as a list; an ``{id: bool}`` object or
    null is accepted too. Pairs with a non-string id or a non-boolean flag are
    rejected here so the error points at the offending pair.
    """
    key = next((k for k in OVERRIDE_KEYS if k in data), None)
    if key is None:
        return data

    raw = data[key]
    if raw is None:
        return {**data, key: []}
    entries = list(raw.items()) if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ConfigError(
            message="intersectionStates must be a list of [id, line1Over] pairs",
            error_type="overrides",
            path=path,
            details=[{"path": key, "message": "expected a list of pairs", "value": raw}],
        )

    problems: list[dict[str, Any]] = []
    pairs: list[list[Any]] = []
    for index, entry in enumerate(entries):
        where = f"{key}[{index}]"
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            problems.append({"path": where, "message": "expected an [id, line1Over] pair", "value": entry})
            continue
        intersection_id, line1_over = entry
        if not isinstance(intersection_id, str) or not intersection_id:
            problems.append({"path": where, "message": "intersection id must be a non-empty string", "value": intersection_id})
        elif not isinstance(line1_over, bool):
            problems.append({"path": where, "message": "line1Over must be true or false", "value": line1_over})
        else:
            pairs.append([intersection_id, line1_over])

    if problems:
        raise ConfigError(
            message=_summarize("Invalid intersection overrides:", problems),
            error_type="overrides",
            path=path,
            details=problems,
        )
    return {**data, key: pairs}


def _validate(data: Any, path: Path | None) -> DesignConfiguration:
    _check_version(data, path)
    data = _normalize_overrides(data, path)
    try:
        return DesignConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _schema_details(e)
        raise ConfigError(
            message=_summarize("Design validation failed:", details),
            error_type="validation",
            path=path,
            details=details,
        )


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"Design file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading design file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading design file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in design file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def load_design(path: Path) -> DesignConfiguration:
    """Load and validate a saved design file.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, carries an
            unsupported version, has malformed intersection overrides or
            fails schema validation. ``error_type`` names which.
    """
    path = Path(path)
    return _validate(_read_json(path), path)


def load_design_from_dict(data: dict[str, Any]) -> DesignConfiguration:
    """Load and validate a design from a dictionary (e.g. an API request body).

    Raises:
        ConfigError: As for load_design, without the file stages.
    """
    return _validate(data, None)
