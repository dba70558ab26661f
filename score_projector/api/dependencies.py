"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from score_projector.infrastructure.clients.notifier import ResultsNotifier


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_notifier() -> ResultsNotifier:
    """Provide results webhook client instance"""
    return ResultsNotifier()
