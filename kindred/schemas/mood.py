from enum import Enum
from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

class MoodType(str, Enum):
    HAPPY = "happy"
    EXCITED = "excited"
    LOVED = "loved"
    SAD = "sad"
    LONELY = "lonely"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    ANGRY = "angry"
    CALM = "calm"
    NEUTRAL = "neutral"

class MoodDetection(BaseModel):
    mood: MoodType
    intensity: int = Field(ge=1, le=10)

class MoodDetectRequest(BaseModel):
    text: str

class MoodTrackRequest(BaseModel):
    user_id: UUID
    companion_id: UUID
    user_companion_id: UUID
    text: str

class MoodEntryResponse(BaseModel):
    id: UUID
    mood_type: MoodType
    intensity: int
    message_context: Optional[str] = None
    detected_automatically: bool = True
    created_at: datetime

    model_config = {"from_attributes": True}

class MoodTrend(BaseModel):
    mood_type: MoodType
    count: int
    avg_intensity: float
