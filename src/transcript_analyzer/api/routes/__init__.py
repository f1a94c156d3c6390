"""Route modules mounted under ``/api``."""

from transcript_analyzer.analyzer.types import ErrorKind

# HTTP status for each failure classification, shared by all routes
STATUS_BY_ERROR_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFIGURATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.PROVIDER: 502,
}
