"""Blog API endpoints for page-view counting."""
from typing import Any
from fastapi import APIRouter, Depends

from app.api.deps import get_view_counter
from app.schemas import BlogViewOut, ViewIn
from app.services.views import ViewCounter

router = APIRouter()


@router.get("/views/{slug}", response_model=BlogViewOut)
def record_view(
    slug: str,
    counter: ViewCounter = Depends(get_view_counter),
) -> Any:
    """
    Count a view of a blog post and return its view data.

    Every call is counted. Use POST with a visitor id to count each
    visitor once per window.
    """
    return BlogViewOut.model_validate(counter.record_view(slug))


@router.post("/views/{slug}", response_model=BlogViewOut)
def record_unique_view(
    slug: str,
    payload: ViewIn,
    counter: ViewCounter = Depends(get_view_counter),
) -> Any:
    """Count a view once per visitor within the dedup window."""
    return BlogViewOut.model_validate(counter.record_view(slug, payload.visitor_id))


@router.get("/views/{slug}/stats", response_model=BlogViewOut)
def get_view_stats(
    slug: str,
    counter: ViewCounter = Depends(get_view_counter),
) -> Any:
    """Read view data without counting. 404 if the post was never viewed."""
    return BlogViewOut.model_validate(counter.get(slug))
