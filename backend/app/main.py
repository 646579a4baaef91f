import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.api.v1.router import api_router
from app.services.exceptions import ExternalServiceError, InvalidArgument

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Interconnecting Flights API",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router)


# ---------------------------------------------------------------------------
# Mappatura errori → status HTTP, corpo sempre {"error": "..."}
# ---------------------------------------------------------------------------

@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # es. departureDateTime non in formato ISO 8601
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ())[1:])}: {e.get('msg', '')}" for e in errors
    )
    return JSONResponse(status_code=400, content={"error": message or "Invalid request"})


@app.exception_handler(ExternalServiceError)
async def external_service_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Errore inatteso su %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": f"Internal server error: {exc}"})


@app.get("/api/v1/health")
async def health():
    return {"status": "ok", "env": settings.app_env}
