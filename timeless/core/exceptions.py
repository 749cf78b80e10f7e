#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Timeless diary project.

The diary codec itself never raises: malformed lines and undecodable
date keys are skipped. These exceptions belong to the layers around it
(payload decoding, file I/O, configuration, backups, CLI).

Exception Hierarchy:
    Exception (built-in)
    └── TimelessError - Base for all project errors
        ├── ValidationError - Data validation failures
        │   └── PayloadError - Malformed save/load payloads
        ├── DiaryFileError - Diary or calendar file read/write failures
        ├── ConfigError - Invalid configuration file
        └── BackupError - Backup export/import failures

Usage:
    from timeless.core.exceptions import DiaryFileError, PayloadError

    try:
        parsed = read_diary(path)
    except DiaryFileError as e:
        logger.error(f"Cannot load diary: {e}")
"""


class TimelessError(Exception):
    """
    Base exception for the project.

    Catch this to handle any error raised by the file, payload,
    configuration or backup layers.
    """

    pass


class ValidationError(TimelessError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Wrong container types
    - Missing required fields
    - Unparseable numeric values

    Examples:
        >>> raise ValidationError("Calendar data must be a JSON object")
    """

    pass


class PayloadError(ValidationError):
    """
    Exception for malformed HTTP/storage payloads.

    Raised when a save request body cannot be decoded:
    - Invalid JSON
    - JSON that is not an object

    Examples:
        >>> raise PayloadError("Invalid JSON payload")
        >>> raise PayloadError("Invalid payload")
    """

    pass


class DiaryFileError(TimelessError):
    """
    Exception for diary and calendar file failures.

    Raised when reading or writing files on disk fails:
    - File not found
    - Encoding issues
    - Refusing to overwrite an existing file
    - Invalid JSON calendar files

    Examples:
        >>> raise DiaryFileError("Diary file not found: diary.md")
        >>> raise DiaryFileError("Output exists (use --force): diary.md")
    """

    pass


class ConfigError(TimelessError):
    """
    Exception for invalid configuration files.

    Examples:
        >>> raise ConfigError("Unknown configuration key: 'diary'")
        >>> raise ConfigError("Configuration must be a YAML mapping")
    """

    pass


class BackupError(TimelessError):
    """
    Exception for backup export and import failures.

    Examples:
        >>> raise BackupError("Backup document is not a JSON object")
    """

    pass
