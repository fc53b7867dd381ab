"""Validation utilities for perf-charts.

This module provides validation functions for:
- Chart dimensions and gridline counts
- Titles and names
- Column lists given on the command line
- Input files and output directories
"""

import re
from pathlib import Path
from typing import List, Union


class ValidationError(Exception):
    """Raised when validation fails."""
    pass


def validate_positive_int(value: int, name: str, min_value: int = 1) -> int:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate.
        name: Name of the parameter (for error messages).
        min_value: Minimum acceptable value.

    Returns:
        The validated value.

    Raises:
        ValidationError: If validation fails.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")

    if value < min_value:
        raise ValidationError(f"{name} must be >= {min_value}, got {value}")

    return value


def validate_non_empty_string(value: str, name: str) -> str:
    """Validate that a string is not empty.

    Args:
        value: String to validate.
        name: Name of the parameter (for error messages).

    Returns:
        The validated string (stripped).

    Raises:
        ValidationError: If string is empty.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")

    value = value.strip()

    if not value:
        raise ValidationError(f"{name} cannot be empty")

    return value


def parse_column_list(columns: str) -> List[Union[int, str]]:
    """Parse a comma-separated column list.

    Numbers become column indices, anything else is kept as a column name.

    Args:
        columns: Column list (e.g., "1,2", "Result,Threads").

    Returns:
        List of indices and names in the given order.

    Raises:
        ValidationError: If the list is empty.
    """
    parsed: List[Union[int, str]] = []
    for part in columns.split(','):
        part = part.strip()
        if not part:
            continue
        parsed.append(int(part) if re.match(r'^\d+$', part) else part)

    if not parsed:
        raise ValidationError(f"No columns given: {columns!r}")

    return parsed


def validate_path(
    path: str,
    name: str,
    must_exist: bool = False,
    must_be_file: bool = False,
    must_be_dir: bool = False,
    create_if_missing: bool = False,
) -> Path:
    """Validate a file system path.

    Args:
        path: Path to validate.
        name: Name of the parameter (for error messages).
        must_exist: If True, path must exist.
        must_be_file: If True, path must be a file.
        must_be_dir: If True, path must be a directory.
        create_if_missing: If True, create directory if missing.

    Returns:
        Validated Path object.

    Raises:
        ValidationError: If validation fails.
    """
    if not path:
        raise ValidationError(f"{name} cannot be empty")

    path_obj = Path(path).expanduser().resolve()

    if must_exist and not path_obj.exists():
        raise ValidationError(f"{name} does not exist: {path}")

    if must_be_file and path_obj.exists() and not path_obj.is_file():
        raise ValidationError(f"{name} must be a file: {path}")

    if must_be_dir and path_obj.exists() and not path_obj.is_dir():
        raise ValidationError(f"{name} must be a directory: {path}")

    if create_if_missing and must_be_dir and not path_obj.exists():
        try:
            path_obj.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Failed to create directory {name}: {path} - {e}")

    return path_obj


def slugify(name: str) -> str:
    """Turn a chart name into an identifier usable in HTML ids and file names.

    Args:
        name: Chart name.

    Returns:
        Identifier made of letters, digits and underscores.

    Raises:
        ValidationError: If nothing usable is left.
    """
    slug = re.sub(r'[^A-Za-z0-9_]+', '_', name.strip()).strip('_')
    if not slug:
        raise ValidationError(f"Cannot build an identifier from name: {name!r}")
    if slug[0].isdigit():
        slug = f"chart_{slug}"
    return slug
