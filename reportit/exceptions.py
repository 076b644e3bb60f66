"""
Domain errors raised by the service layer and mapped to HTTP responses in main
"""


class ReportItError(Exception):
    """Base class for expected, caller-visible failures"""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ReportItError):
    """Entity id could not be resolved"""
    status_code = 404


class ForbiddenError(ReportItError):
    """Actor lacks the role or ownership for the operation"""
    status_code = 403


class InvalidInputError(ReportItError):
    """Missing or empty field, or value outside an enumerated set"""
    status_code = 400


class ConflictError(ReportItError):
    """Uniqueness violation, e.g. a taken username"""
    status_code = 409
