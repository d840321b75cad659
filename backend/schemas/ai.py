# backend/schemas/ai.py
from typing import Optional

from pydantic import BaseModel

class AIInsightRequest(BaseModel):
    question: Optional[str] = None

class AIInsightResponse(BaseModel):
    answer: str
    usedFallback: bool
