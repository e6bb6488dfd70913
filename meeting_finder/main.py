from __future__ import annotations
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meeting_finder.config import settings
from meeting_finder.deps import get_controller
from meeting_finder.finder import InvalidRequestError
from meeting_finder.logging_conf import setup_logging
from meeting_finder.models import FindSlotsRequest, FindSlotsResponse

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health - Check server status",
    "POST /find-meeting-slots - Find meeting slots across timezones",
]

app = FastAPI(title="Meeting Finder", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err.get("loc", ["body"])[-1]) for err in exc.errors()})
    logger.info("Rejected malformed request body: %s", fields)
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request fields: {', '.join(fields)}"},
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "Endpoint not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
    )


@app.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "message": "Meeting Finder API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.post("/find-meeting-slots", response_model=FindSlotsResponse)
def find_meeting_slots(req: FindSlotsRequest, ctrl=Depends(get_controller)):
    return ctrl.find(req)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
