# routers/analyze.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_advice_client
from models.analyze_model import AnalysisRequest, AnalysisResult, ApiError
from services.analyze_service import AdviceClient, analyze_diary

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={400: {"model": ApiError}, 500: {"model": ApiError}},
)
async def analyze(b: AnalysisRequest, client: AdviceClient = Depends(get_advice_client)):
    """
    Diary text -> hosted advice model -> {"emotion", "advice"} as received.
    Body validation failures are answered with 400 (see main.py handlers).
    """
    data = await analyze_diary(b.text, client)
    # bypass response_model filtering so extra upstream keys survive
    return JSONResponse(content=data)
