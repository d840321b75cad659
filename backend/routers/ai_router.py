# backend/routers/ai_router.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from database.session import get_db
from dependencies.auth import CurrentUser
from schemas.ai import AIInsightRequest, AIInsightResponse
from services.ai_service import AIService, get_ai_service
from services.errors import BadRequestError
from services.weather_service import WeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

@router.post("/insights", response_model=AIInsightResponse)
def ai_insights(
    current_user: CurrentUser,
    payload: Optional[AIInsightRequest] = Body(default=None),
    db: Session = Depends(get_db),
    ai: AIService = Depends(get_ai_service),
    weather: WeatherService = Depends(get_weather_service),
):
    """Answer a question about the caller's saved cities' current weather."""
    try:
        return ai.insights_for_user(db, weather, current_user.id, payload.question if payload else None)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception(f"AI insights failed for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate AI insights")
