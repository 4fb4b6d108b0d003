from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case в Python, camelCase в JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FillerDetail(CamelModel):
    word: str
    count: int = Field(ge=1)


class FillerStats(CamelModel):
    total: int = Field(ge=0)
    ratio: Union[int, float]  # проценты, один знак после запятой
    details: List[FillerDetail]


class Scores(CamelModel):
    clarity: int
    confidence: int


class Tips(CamelModel):
    pace: str
    fillers: str


class AnalysisReport(CamelModel):
    transcript: str
    duration_seconds: Union[int, float]
    word_count: int = Field(ge=0)
    wpm: int = Field(ge=0)
    filler: FillerStats
    scores: Scores
    summary: str
    tips: Tips


class TranscriptAnalysisRequest(CamelModel):
    transcript: Optional[str] = ""
    duration_seconds: Optional[float] = 0.0

    @field_validator("transcript", mode="before")
    def default_transcript(cls, v):
        return "" if v is None else v

    @field_validator("duration_seconds", mode="before")
    def default_duration(cls, v):
        return 0.0 if v is None or v == "" else v


class AnalysisResponse(BaseModel):
    ok: Literal[True] = True
    result: AnalysisReport


class ErrorResponse(BaseModel):
    ok: Literal[False] = False
    error: str
    details: Optional[str] = None
