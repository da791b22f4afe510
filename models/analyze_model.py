# models/analyze_model.py
from pydantic import BaseModel, ConfigDict, Field, StrictStr


class AnalysisRequest(BaseModel):
    # empty string rejected, whitespace-only passes through
    text: StrictStr = Field(..., min_length=1)


class AnalysisResult(BaseModel):
    """Response of the external advice endpoint. Extra keys are tolerated."""
    model_config = ConfigDict(extra="allow")

    emotion: StrictStr
    advice: StrictStr


class ParsedAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: str
    suggestion: str = ""
    emotional_reflection: str = Field("", alias="emotionalReflection")
    keywords: str = ""
    sentiment_score: str = Field("", alias="sentimentScore")


class ApiError(BaseModel):
    error: str
    code: str
