"""
Error types shared by dashboard components
"""


class DashboardError(Exception):
    """Base error for the dashboard"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ApiError(DashboardError):
    """Backend call failed: network error, non-2xx reply or unparseable body"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(DashboardError):
    """Backend rejected the stored token (HTTP 401)

    Not an ApiError, so route-level `except ApiError` blocks let it through
    to the app-level handler.
    """

    status_code = 401

    def __init__(self, message="Session expired. Please login again."):
        super().__init__(message)


class ValidationError(DashboardError):
    """Form input rejected before anything is sent to the backend"""
