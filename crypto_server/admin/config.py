"""Expose the loaded server config for debugging. The signing secret is never included."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..config import ServerConfig
from ..fields import FieldTransformService

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_config(request: Request) -> ServerConfig:
    return request.app.state.server_config


def _get_field_service(request: Request) -> FieldTransformService:
    return request.app.state.field_service


@router.get("/config")
async def config(
    request: Request,
    config: ServerConfig = Depends(_get_config),
    service: FieldTransformService = Depends(_get_field_service),
) -> dict:
    return {
        "version": request.app.version,
        "listen": {"host": config.listen.host, "port": config.listen.port},
        "encoding_algorithm": config.encoding.algorithm,
        "signing_algorithm": config.signing.algorithm,
        "signature_length": service.signer.signature_length,
        "secret_configured": bool(config.signing.secret),
        "log_level": config.log_level,
    }
