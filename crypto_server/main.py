from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .admin import config as admin_config
from .admin import health as admin_health
from .algorithms import SigningError, build_encoder, build_signer
from .config import ServerConfig, get_server_config
from .fields import FieldEncodingError, FieldTransformService
from .validation.validator import SchemaRegistry, get_schema_registry

logger = logging.getLogger(__name__)
router = APIRouter()

ENDPOINTS = (
    ("POST", "/encrypt", "Encode every field of a JSON payload"),
    ("POST", "/decrypt", "Decode every field of a JSON payload"),
    ("POST", "/sign", "Sign a JSON payload"),
    ("POST", "/verify", "Verify a payload signature"),
)


def create_app(server_config: ServerConfig | None = None) -> FastAPI:
    """Build the application. Configuration is resolved at startup, not import."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = server_config or get_server_config()
        logging.basicConfig(level=settings.log_level)
        encoder = build_encoder(settings)
        signer = build_signer(settings)

        app.state.server_config = settings
        app.state.schema_registry = get_schema_registry()
        app.state.field_service = FieldTransformService(encoder=encoder, signer=signer)
        app.state.start_time = datetime.now(timezone.utc)
        logger.info(
            "crypto server ready: encoding=%s signing=hmac-%s",
            encoder.name,
            signer.algorithm,
        )
        yield

    app = FastAPI(
        title="JSON Crypto Server",
        version=__version__,
        docs_url="/docs",
        lifespan=lifespan,
    )
    # any origin is allowed and echoed back
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(admin_health.router)
    app.include_router(admin_config.router)
    app.include_router(router)
    return app


# Dependency helpers ---------------------------------------------------------


def get_schema_service(request: Request) -> SchemaRegistry:
    return request.app.state.schema_registry


def get_field_service(request: Request) -> FieldTransformService:
    return request.app.state.field_service


# Routes ---------------------------------------------------------------------

@router.get("/", tags=["meta"])
async def root(
    request: Request,
    service: FieldTransformService = Depends(get_field_service),
) -> dict[str, Any]:
    return {
        "service": "crypto-server",
        "version": request.app.version,
        "encoding": service.encoder.name,
        "signing": {
            "algorithm": f"hmac-{service.signer.algorithm}",
            "signature_length": service.signer.signature_length,
        },
        "endpoints": [f"{method} {path}" for method, path, _ in ENDPOINTS],
    }


@router.get("/ping", tags=["meta"])
async def ping(request: Request) -> dict[str, Any]:
    return {"status": "ok", "version": request.app.version}


def _require_object(schemas: SchemaRegistry, payload: Any) -> None:
    if not schemas.is_valid("json_payload", payload):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")


@router.post("/encrypt", tags=["fields"])
async def encrypt(
    payload: Any = Body(...),
    schemas: SchemaRegistry = Depends(get_schema_service),
    service: FieldTransformService = Depends(get_field_service),
) -> dict[str, str]:
    _require_object(schemas, payload)
    try:
        return service.encode_fields(payload)
    except FieldEncodingError as exc:
        logger.error("field encoding failed: %s", exc, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.post("/decrypt", tags=["fields"])
async def decrypt(
    payload: Any = Body(...),
    schemas: SchemaRegistry = Depends(get_schema_service),
    service: FieldTransformService = Depends(get_field_service),
) -> dict[str, Any]:
    _require_object(schemas, payload)
    return service.decode_fields(payload)


@router.post("/sign", tags=["signatures"])
async def sign(
    payload: Any = Body(...),
    schemas: SchemaRegistry = Depends(get_schema_service),
    service: FieldTransformService = Depends(get_field_service),
) -> dict[str, str]:
    _require_object(schemas, payload)
    try:
        return service.sign(payload)
    except SigningError as exc:
        logger.error("signing failed: %s", exc, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.post(
    "/verify",
    tags=["signatures"],
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def verify(
    payload: Any = Body(...),
    schemas: SchemaRegistry = Depends(get_schema_service),
    service: FieldTransformService = Depends(get_field_service),
) -> Response:
    if not schemas.is_valid("signed_payload", payload):
        raise HTTPException(status_code=400, detail="Missing signature or data")
    if not service.verify(payload["data"], payload["signature"]):
        raise HTTPException(status_code=400, detail="Invalid signature")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app = create_app()
