import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from study_group_api.api import groups
from study_group_api.api.auth import UnauthorizedError
from study_group_api.api.schemas import GenerateRequest
from study_group_api.config import get_settings
from study_group_api.content.validators import ErrorKind
from study_group_api.service.envelope import error_envelope, make_request_id
from study_group_api.service.generator import ContentService

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="study-group-api", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = ContentService(settings=settings)
rag = APIRouter(prefix="/api/rag", tags=["rag"])


def _respond(outcome: tuple[int, dict]) -> JSONResponse:
    status_code, payload = outcome
    return JSONResponse(status_code=status_code, content=payload)


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    logger.info("auth.rejected path=%s", request.url.path)
    return _respond(error_envelope(403, ErrorKind.UNAUTHORIZED, str(exc)))


@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request.invalid path=%s errors=%d", request.url.path, len(exc.errors()))
    return _respond(
        error_envelope(
            400,
            ErrorKind.INVALID_REQUEST,
            "Request body is malformed",
            make_request_id(),
            details=str(exc.errors()),
        )
    )


@app.get("/")
async def root() -> dict:
    return {"success": True, "message": "hello from backend", "error": None}


@app.post("/")
async def root_post() -> dict:
    return {"success": True, "message": "POST request received", "error": None}


@app.get("/api/health")
async def health() -> dict:
    logger.info("health.check")
    return {"success": True, "status": "UP", "message": "API is healthy", "error": None}


@rag.get("/health")
async def rag_health() -> JSONResponse:
    return _respond(service.health())


@rag.post("/summary")
async def summary(req: GenerateRequest | None = None) -> JSONResponse:
    req = req or GenerateRequest()
    return _respond(await service.summarize(req.note, req.options))


@rag.post("/quiz")
async def quiz(req: GenerateRequest | None = None) -> JSONResponse:
    req = req or GenerateRequest()
    return _respond(await service.quiz(req.note, req.options))


app.include_router(rag)
app.include_router(groups.router)
