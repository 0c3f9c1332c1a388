"""
Input validation utilities for the movie cleaning pipeline.

Checks the names and paths that end up in SQL statements or file reads,
so a bad table name fails fast instead of producing broken SQL.
"""

import re
from collections.abc import Iterable


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def sanitize_sql_identifier(identifier: str, field_name: str = "identifier") -> str:
    """
    Sanitize an SQL identifier (table name, view name, column name).

    Args:
        identifier: The identifier to sanitize
        field_name: Name of the field (for error messages)

    Returns:
        The validated identifier

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> sanitize_sql_identifier("movies_clean")
        'movies_clean'
        >>> sanitize_sql_identifier("movies; DROP TABLE movies_raw;")  # doctest: +SKIP
        ValidationError: identifier contains invalid characters
    """
    if not identifier or not isinstance(identifier, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    identifier = identifier.strip()

    # Letters, digits and underscores, not starting with a digit
    if not re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', identifier):
        raise ValidationError(
            f"{field_name} contains invalid characters. "
            "SQL identifiers must start with a letter or underscore and contain only "
            "alphanumeric characters and underscores."
        )

    if len(identifier) > 128:
        raise ValidationError(f"{field_name} exceeds maximum length of 128 characters")

    reserved_keywords = {
        "select", "insert", "update", "delete", "drop", "create", "alter",
        "table", "database", "index", "view", "user", "grant", "revoke"
    }
    if identifier.lower() in reserved_keywords:
        raise ValidationError(
            f"{field_name} '{identifier}' is a reserved SQL keyword. "
            "Please use a different name."
        )

    return identifier


def require_columns(
    available: Iterable[str],
    required: Iterable[str],
    field_name: str = "columns"
) -> list[str]:
    """
    Check that every required column exists.

    Args:
        available: Columns present in the DataFrame
        required: Columns the caller needs
        field_name: Name of the field (for error messages)

    Returns:
        The required columns as a list

    Raises:
        ValidationError: If any column is missing

    Examples:
        >>> require_columns(["title", "budget"], ["budget"])
        ['budget']
    """
    available_set = set(available)
    required_list = list(required)
    missing = [name for name in required_list if name not in available_set]
    if missing:
        raise ValidationError(f"{field_name} not found: {', '.join(missing)}")
    return required_list


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Validate an input file path.

    Args:
        file_path: The file path to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file path (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_file_path("/data/movies_raw.csv")
        '/data/movies_raw.csv'
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_path = file_path.strip()

    if not file_path:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if "\x00" in file_path:
        raise ValidationError(f"{field_name} contains null bytes")

    if len(file_path) > 4096:  # Linux PATH_MAX
        raise ValidationError(f"{field_name} exceeds maximum length of 4096 characters")

    return file_path
