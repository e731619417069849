"""Message endpoints for the active day bucket."""
from typing import Any
from fastapi import APIRouter, Depends

from app.api.deps import get_message_store
from app.schemas import (
    MessageDeletedOut,
    MessageIn,
    MessageItemOut,
    MessageListOut,
    MessageOut,
    StatusMessageOut,
)
from app.services.messages import MessageStore

router = APIRouter()


def _items(store: MessageStore) -> list[MessageOut]:
    return [MessageOut.model_validate(m) for m in store.list()]


@router.get("/", response_model=MessageListOut)
def list_messages(store: MessageStore = Depends(get_message_store)) -> Any:
    """List all messages of today's bucket in creation order."""
    items = _items(store)
    return MessageListOut(cache_date=store.bucket_key(), total_count=len(items), items=items)


@router.post("/", response_model=MessageItemOut)
def create_message(
    payload: MessageIn,
    store: MessageStore = Depends(get_message_store),
) -> Any:
    message = store.create(payload.message)
    return MessageItemOut(item=MessageOut.model_validate(message))


@router.put("/{message_id}", response_model=MessageItemOut)
def update_message(
    message_id: int,
    payload: MessageIn,
    store: MessageStore = Depends(get_message_store),
) -> Any:
    """
    Replace a message body.

    Returns 404 when the id is not in today's bucket.
    """
    message = store.update(message_id, payload.message)
    return MessageItemOut(item=MessageOut.model_validate(message))


@router.delete("/{message_id}", response_model=MessageDeletedOut)
def delete_message(
    message_id: int,
    store: MessageStore = Depends(get_message_store),
) -> Any:
    store.delete(message_id)
    items = _items(store)
    return MessageDeletedOut(
        message=f"Message with ID {message_id} deleted successfully.",
        total_count=len(items),
        items=items,
    )


@router.delete("/", response_model=StatusMessageOut)
def delete_all_messages(store: MessageStore = Depends(get_message_store)) -> Any:
    store.delete_all()
    return StatusMessageOut(message="All messages deleted successfully.")
