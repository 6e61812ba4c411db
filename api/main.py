import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, db
from core.logging_config import configure_logging
from core.pagination import validation_details
from core.schemas import CamelModel
from fields import router as fields_router
from fields.schemas import FieldsResponse, FilterSelectedFieldsResponse
from professors import router as professors_router
from professors.schemas import ProfessorsResponse
from topics import router as topics_router
from topics.schemas import TopicsResponse

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Thesis proposal browser API", lifespan=lifespan)

# Allow the frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(topics_router.router, tags=["topics"])
app.include_router(fields_router.router, tags=["fields"])
app.include_router(professors_router.router, tags=["professors"])


# Listing routes answer malformed input with their own empty envelope so
# clients can always read the entity list and the counters.
_LISTING_ENVELOPES: dict[str, type[CamelModel]] = {
    "/topics": TopicsResponse,
    "/fields": FieldsResponse,
    "/fields/filter": FilterSelectedFieldsResponse,
    "/professors": ProfessorsResponse,
}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    details = validation_details(exc.errors())
    envelope = _LISTING_ENVELOPES.get(request.url.path.rstrip("/") or "/")
    if envelope is None:
        content = {"success": False, "error": "Invalid input parameters", "details": details}
    else:
        content = envelope(success=False, error="Invalid input parameters", details=details).to_response()
    return JSONResponse(status_code=422, content=content)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "thesis proposal browser api"}
