from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import Optional

from kindred.schemas.questionnaire import QuestionnaireData

class CompanionProfile(BaseModel):
    id: UUID
    name: str
    age: int
    gender: str
    bio: str = ""
    hobbies: list[str] = Field(default_factory=list)
    personality: list[str] = Field(default_factory=list)
    likes: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    location: str = ""

    model_config = {"from_attributes": True}

    @field_validator("hobbies", "personality", "likes", "dislikes", mode="before")
    @classmethod
    def none_to_empty_list(cls, v):
        return [] if v is None else v

    @field_validator("bio", "location", mode="before")
    @classmethod
    def none_to_empty_str(cls, v):
        return "" if v is None else v

class CompanionMatch(CompanionProfile):
    compatibility_score: float = Field(ge=0.0, le=1.0)
    match_reasons: list[str] = Field(default_factory=list, max_length=3)

class MatchPreviewRequest(BaseModel):
    questionnaire: QuestionnaireData
    candidates: list[CompanionProfile]

class MatchResponse(BaseModel):
    matches: list[CompanionMatch]
    summary: str
