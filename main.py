import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from config import settings
from core.errors import PortalError, UnexpectedError, ValidationError
from services.db import init_models
from api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger("wellness")


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.create_tables:
        await init_models()
    yield


app = FastAPI(title="Wellness Portal API", version="1.0.0", lifespan=lifespan)

# CORS (public demo only – lock down in prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────── error mapping ───────────────────
@app.exception_handler(PortalError)
async def _portal_error(_: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


@app.exception_handler(RequestValidationError)
async def _request_invalid(_: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = f"{where}: {first.get('msg', 'invalid input')}" if where else "Invalid request"
    err = ValidationError(msg)
    return JSONResponse(status_code=err.status_code, content=err.as_dict())


@app.exception_handler(SQLAlchemyError)
async def _storage_failure(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    _LOG.exception("storage failure on %s %s", request.method, request.url.path)
    err = UnexpectedError("Something went wrong, please try again")
    return JSONResponse(status_code=err.status_code, content=err.as_dict())


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["meta"])
def root() -> dict[str, str]:
    return {"message": "Wellness API is running"}


@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.env_name}
