"""
Answer grading endpoints
"""

from fastapi import APIRouter, HTTPException
from api.schemas.grading import GradeRequest, GradeResponse
from domain.evaluation.grader import count_keyword_matches, keyword_match_percentage
from core.exceptions import EvaluationError

router = APIRouter(prefix="/api/v1/grading", tags=["grading"])


@router.post("/score", response_model=GradeResponse)
async def score_response(request: GradeRequest):
    """Count expected keywords the response actually provides"""
    matched = count_keyword_matches(request.response_text, request.expected_keywords)
    try:
        percentage = keyword_match_percentage(matched, len(request.expected_keywords))
    except EvaluationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return GradeResponse(
        keywords_matched=matched,
        total_keywords=len(request.expected_keywords),
        keyword_match_percentage=percentage,
    )
