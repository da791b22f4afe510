# main.py
import os
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers import analyze
from services.analyze_service import AnalyzeError, InvalidRequestError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("diary_proxy")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="Diary Mood Proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze.router)


@app.exception_handler(AnalyzeError)
async def analyze_error_handler(request: Request, exc: AnalyzeError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # missing / non-string / empty text, or a body that isn't a JSON object.
    # malformed JSON is a client error here too (400, not the generic 500)
    # keep the diary text out of the log: location and error type only
    problems = [(".".join(str(p) for p in err.get("loc", ())), err.get("type")) for err in exc.errors()]
    logger.info("rejected %s: %s", request.url.path, problems)
    return await analyze_error_handler(request, InvalidRequestError())


@app.get("/health")
def health():
    return {"ok": True}
