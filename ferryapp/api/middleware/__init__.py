"""
HTTP middleware.
"""

from ferryapp.api.middleware.request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]
