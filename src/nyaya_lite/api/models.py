from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from nyaya_lite.api import config


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=config.MIN_QUERY_LENGTH, max_length=config.MAX_QUERY_LENGTH)
    session_id: Optional[str] = Field(default=None, alias="sessionId", min_length=1, max_length=200)


class LawSearchParams(BaseModel):
    search: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None, max_length=200)


class LawyerSearchParams(BaseModel):
    specialization: Optional[str] = Field(default=None, max_length=100)
