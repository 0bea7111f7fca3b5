"""
Shared API dependencies.
"""
from fastapi import Request

from runstr.services.tasks import TaskDispatcher


def get_dispatcher(request: Request) -> TaskDispatcher:
    """The dispatcher owned by the running application."""
    return request.app.state.dispatcher
