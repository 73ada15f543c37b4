#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdtree library.

Markdown syntax problems are never raised: they are collected as
diagnostic messages and the parse still returns a complete AST. The
exceptions defined here cover the remaining failure classes, namely
invalid arguments, infrastructure faults of the concurrency scheduler
and failures of the HTML transform.

Exception Hierarchy
-------------------
- MdTreeError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for an entry point)

  - ParsingError (terminal parse failures)
    - ConcurrencyError (scheduler infrastructure faults)
      - UnitFailedError (a parse unit raised)
      - ParseTimeoutError (a parse unit exceeded the timeout)

  - RenderingError (AST to HTML transform failures)

"""

from typing import Any


class MdTreeError(Exception):
    """Base exception class for all mdtree-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdTreeError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the entry point that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(MdTreeError):
    """Exception raised when a parse cannot complete at all.

    No AST is available when this is raised; local markdown defects are
    reported as messages instead.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class ConcurrencyError(ParsingError):
    """Base class for fatal faults of the concurrency scheduler."""

    def __init__(self, message: str, unit_index: int | None = None, original_error: Exception | None = None):
        """Initialize the concurrency error."""
        super().__init__(message, parsing_stage="scheduler", original_error=original_error)
        self.unit_index = unit_index


class UnitFailedError(ConcurrencyError):
    """Exception raised when a parse unit raises an internal fault.

    Parameters
    ----------
    unit_index : int
        Position of the failing unit in dispatch order
    original_error : Exception
        The exception raised inside the unit
    line : int, optional
        First source line of the block the unit was processing

    """

    def __init__(self, unit_index: int, original_error: Exception, line: int | None = None):
        """Initialize the unit failure error."""
        where = f"Parse unit #{unit_index}" if line is None else f"Parse unit #{unit_index} (line {line})"
        super().__init__(
            f"{where} has died with reason {original_error!r}",
            unit_index=unit_index,
            original_error=original_error,
        )
        self.line = line


class ParseTimeoutError(ConcurrencyError):
    """Exception raised when a parse unit does not finish within the timeout.

    Parameters
    ----------
    timeout : int
        The configured bound in milliseconds
    unit_index : int, optional
        Position of the first unit found unfinished

    """

    def __init__(self, timeout: int, unit_index: int | None = None):
        """Initialize the timeout error."""
        where = "Parse unit" if unit_index is None else f"Parse unit #{unit_index}"
        super().__init__(
            f"{where} has not responded within the set timeout of {timeout}ms, consider increasing it",
            unit_index=unit_index,
        )
        self.timeout = timeout


class RenderingError(MdTreeError):
    """Exception raised when the AST to HTML transform fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage
