#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the dom2md library.

Malformed or partial HTML trees are never an error: absent attributes read
as empty strings, unknown tags render transparently, and missing ancestors
simply do not match. The exceptions below cover the remaining failure
modes around a conversion: bad options, unreadable input, parser backend
problems, and sink write failures.

Exception Hierarchy
-------------------
- Dom2MdError (base exception)

  - ValidationError (parameter/option validation)

  - InputError (unsupported input type, unreadable file)

  - ParsingError (HTML parser backend failures)

  - RenderingError (output generation failures)
    - OutputWriteError (sink write failures, also an OSError)

  - DependencyError (missing optional parser backend)

"""

from typing import Any


class Dom2MdError(Exception):
    """Base exception class for all dom2md-specific errors.

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

    def __str__(self) -> str:
        """Return the error message."""
        return self.message


class ValidationError(Dom2MdError):
    """Exception raised for invalid conversion options or parameters.

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


class InputError(Dom2MdError):
    """Exception raised when conversion input cannot be used.

    Parameters
    ----------
    message : str
        Description of the input problem
    input_type : str, optional
        Name of the offending input type
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, input_type: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.input_type = input_type


class ParsingError(Dom2MdError):
    """Exception raised when the HTML parser backend fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parser_name : str, optional
        The BeautifulSoup tree builder that was in use
    original_error : Exception, optional
        The underlying exception raised by the parser

    """

    def __init__(self, message: str, parser_name: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parser_name = parser_name


class RenderingError(Dom2MdError):
    """Exception raised when Markdown output generation fails.

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


class OutputWriteError(RenderingError, OSError):
    """Exception raised when writing to the output sink fails.

    The conversion that was in progress is aborted; nothing is retried.
    Being an ``OSError`` as well, it can be handled like any other I/O error.

    Parameters
    ----------
    message : str, optional
        Custom error message
    sink_name : str, optional
        Description of the sink that failed (file name or type name)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self, message: str | None = None, sink_name: str | None = None, original_error: Exception | None = None
    ):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write Markdown output to {sink_name or 'sink'}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, rendering_stage="sink_write", original_error=original_error)
        self.sink_name = sink_name


class DependencyError(Dom2MdError):
    """Exception raised when an optional package is not installed.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the package (e.g. the parser backend)
    missing_packages : list[str]
        Distribution names of the missing packages
    message : str, optional
        Custom error message. If not provided, generates one with an install hint
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[str],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = ", ".join(f"'{name}'" for name in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}"
            if missing_packages:
                message += f"\nInstall with: pip install {' '.join(missing_packages)}"
        super().__init__(message, original_error=original_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages


__all__ = [
    "Dom2MdError",
    "ValidationError",
    "InputError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "DependencyError",
]
