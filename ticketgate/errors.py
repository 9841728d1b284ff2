"""Failures raised by ticket issuing and lookup.

Each error carries the HTTP status it maps to. The handlers registered in
``ticketgate.main`` turn them into JSON for API routes and plain text for
pages.
"""


class TicketGateError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TicketGateError):
    status_code = 400


class LoginFailed(TicketGateError):
    status_code = 401


class NotFound(TicketGateError):
    status_code = 404


# 409 would fit better; kept at 500 to match what existing clients see.
class QuotaExceeded(TicketGateError):
    status_code = 500


class StoreError(TicketGateError):
    status_code = 500


class UpstreamError(TicketGateError):
    status_code = 500


class LoginRequired(Exception):
    """Raised by the session guard; handled as a redirect to ``/login``."""

    def __init__(self, return_to: str) -> None:
        super().__init__(return_to)
        self.return_to = return_to
