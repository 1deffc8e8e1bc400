from pydantic import BaseModel, Field, field_validator

class QuestionnaireData(BaseModel):
    """Answers from the onboarding questionnaire, used as matching preferences."""

    companion_type: str = ""  # romantic / casual / spiritual / intimate
    gender: str = "any"
    age_range: str = ""  # 18-25 / 26-35 / 36-45 / 46+
    hobbies: list[str] = Field(default_factory=list)
    personality: list[str] = Field(default_factory=list)
    relationship_goals: str = ""  # romantic / friendship / support / exploration
    name: str = ""

    @field_validator("hobbies", "personality", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v
