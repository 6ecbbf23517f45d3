"""HTTP error handling shared by routers."""

from .errors import ApiError, AuthFailure, api_error_handler, unauthorized_error

__all__ = ["ApiError", "AuthFailure", "api_error_handler", "unauthorized_error"]
