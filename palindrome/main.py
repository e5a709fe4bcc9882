import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse

from .checker import InvalidInput, normalize, shutdown_default_executor
from .config import get_settings
from .models import CheckRequest, CheckResponse, ErrorResponse, FileCheckResponse, HealthResponse
from .presenter import BusyCounter, CheckOutcome, CheckPresenter
from .upload import UndecodableUpload, decode_text

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    shutdown_default_executor()


app = FastAPI(
    title="palindrome-checker",
    description="Validate a string and check whether it reads the same both ways",
    version="0.1.0",
    lifespan=lifespan,
)

in_flight = BusyCounter()


class RequestView:
    """Per-request view; busy state goes to the shared in-flight counter."""

    def __init__(self, counter: BusyCounter):
        self.counter = counter
        self.result: Optional[str] = None
        self.error: Optional[InvalidInput] = None

    def show_busy(self) -> None:
        self.counter.show_busy()

    def hide_busy(self) -> None:
        self.counter.hide_busy()

    def show_result(self, message: str) -> None:
        self.result = message

    def show_error(self, error: InvalidInput) -> None:
        self.error = error


async def _run_check(text: Optional[str]) -> CheckOutcome:
    view = RequestView(in_flight)
    outcome = await CheckPresenter(view).on_check(text)
    if view.error is not None:
        raise view.error
    return outcome


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(
        status_code=422,
        content={"detail": {"reason": exc.reason.value, "message": exc.message}},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True, "checks_in_flight": in_flight.count}


@app.post("/check", response_model=CheckResponse, responses={422: {"model": ErrorResponse}})
async def check(body: CheckRequest):
    outcome = await _run_check(body.text)
    return {
        "text": body.text,
        "normalized": normalize(body.text),
        "is_palindrome": outcome.is_palindrome,
        "message": outcome.message,
    }


@app.post("/check/file", response_model=FileCheckResponse, responses={422: {"model": ErrorResponse}})
async def check_file(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".txt"):
        raise HTTPException(status_code=422, detail="Only .txt files are supported")

    limit = get_settings().max_upload_bytes
    raw = await file.read(limit + 1)
    if len(raw) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds {limit} bytes")

    try:
        text, encoding = decode_text(raw)
    except UndecodableUpload as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    outcome = await _run_check(text)
    return {
        "text": text,
        "normalized": normalize(text),
        "is_palindrome": outcome.is_palindrome,
        "message": outcome.message,
        "filename": file.filename,
        "encoding": encoding,
    }
