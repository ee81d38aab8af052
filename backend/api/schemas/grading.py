"""
Pydantic models for grading endpoints
"""

from pydantic import BaseModel
from typing import List


class GradeRequest(BaseModel):
    """Answer to grade against expected keywords"""
    response_text: str
    expected_keywords: List[str]


class GradeResponse(BaseModel):
    """Keyword match result"""
    keywords_matched: int
    total_keywords: int
    keyword_match_percentage: float
