"""
Suggestions API endpoint.

Snapshots the current moment once and ranks the stored activities for it.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from activity_planner import crud
from activity_planner.clock import current_moment
from activity_planner.database import get_db
from activity_planner.logging import get_logger
from activity_planner.schemas import SuggestionRead

logger = get_logger(__name__)

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.get("", response_model=List[SuggestionRead], response_model_exclude_none=True)
def get_suggestions(
    limit: Optional[int] = Query(default=None, description="Maximum number of suggestions (default from settings)"),
    category: Optional[int] = Query(default=None, description="Only suggest activities in this category"),
    reasons: str = Query(default="text", pattern="^(text|list)$", description="'text' for a joined reason, 'list' for the ordered reasons"),
    at: Optional[datetime] = Query(default=None, description="Evaluate this moment instead of now"),
    db: Session = Depends(get_db)
) -> List[SuggestionRead]:
    """
    Get the activities that fit the current moment, best first.

    Returns an empty list when nothing is scheduled for now.
    """
    now = at or current_moment()
    results = crud.get_suggestions(db, now, limit=limit, category_id=category)

    logger.info("suggestions_served", count=len(results), category=category, at=now.isoformat())

    if reasons == "list":
        return [SuggestionRead(activity=r.activity, score=r.score, reasons=r.reasons) for r in results]
    return [SuggestionRead(activity=r.activity, score=r.score, reason=r.reason) for r in results]
