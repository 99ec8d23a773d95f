import json
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from app.helper.verification_helper import VerificationService

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def _read_json(request: Request):
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Request body is not valid JSON")
        return None


def build_router(service: VerificationService) -> APIRouter:
    router = APIRouter(tags=["Phone Verification"])

    @router.options("/send-sms-verification")
    @router.options("/verify-sms-code")
    async def preflight():
        return Response(content="ok", headers=CORS_HEADERS)

    @router.post("/send-sms-verification")
    async def send_sms_verification(request: Request):
        """Sends a code to the phone number. Runs in development mode when credentials are missing."""
        status_code, body = await service.handle_send(await _read_json(request))
        return JSONResponse(content=body, status_code=status_code, headers=CORS_HEADERS)

    @router.post("/verify-sms-code")
    async def verify_sms_code(request: Request):
        """Checks the submitted 6-digit code."""
        status_code, body = await service.handle_verify(await _read_json(request))
        return JSONResponse(content=body, status_code=status_code, headers=CORS_HEADERS)

    return router
