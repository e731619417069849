from fastapi import Request

from app.services.messages import MessageStore
from app.services.views import ViewCounter


def get_message_store(request: Request) -> MessageStore:
    """The application's message store (created at startup, held on app.state)."""
    return request.app.state.message_store


def get_view_counter(request: Request) -> ViewCounter:
    return request.app.state.view_counter
