"""Error types raised while loading input and talking to the Okta API."""

from typing import Optional


class OktaBulkError(Exception):
    """Base class for all okta-bulk errors."""


class FormatError(OktaBulkError):
    """A CSV row does not have the expected shape."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self):
        line_info = f" (line {self.line})" if self.line else ""
        return f"{self.message}{line_info}"


class HttpError(OktaBulkError):
    """The API answered with a non-success status code."""

    def __init__(self, response):
        self.response = response
        self.status_code = response.status_code
        self.reason = response.reason
        self.body = response.body
        super().__init__(f"{self.status_code} {self.reason}")


class AmbiguousResultError(OktaBulkError):
    """A lookup answered with zero or several matches instead of exactly one.

    Raised for group searches that match 0 or 2+ groups, and for user lookups
    whose successful response is not a single user object.
    """

    def __init__(self, name: str, matches: int, body: str = "", kind: str = "group"):
        self.name = name
        self.matches = matches
        self.body = body
        self.kind = kind
        super().__init__(f"Expected exactly one {kind} matching {name!r}, found {matches}")


class ConfigError:
    """A single problem found while validating the run configuration.

    Returned (never raised) by ``validate_config`` so callers decide how to
    surface it.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"ConfigError({self.field!r}, {self.message!r})"
