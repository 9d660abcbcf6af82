from fastapi import HTTPException, status


class BadRequest(HTTPException):
    """Malformed input, unknown export format or schema violation."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class ServerError(HTTPException):
    """Storage failure. Messages are fixed strings, never raw exception text."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        )


class AssignmentEnvironmentError(EnvironmentError):
    """Raised when identity resolution runs without any durable store."""


class StoreUnavailableError(Exception):
    """A key/value identity store refused a read or write."""


class EventLogCorruptError(ValueError):
    """A stored log line could not be parsed or failed validation."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        super().__init__(message)
