import json
import uuid
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, Response

from relay.api.auth import AuthGuard, require_bearer
from relay.api.services.error_handling import ErrorResponseBuilder, plain_text
from relay.api.services.streaming import (
    CORS_HEADERS,
    new_response_id,
    streaming_response,
    to_aggregate,
    to_raw_sse,
    to_sse,
    unix_now,
)
from relay.api.validation import RequestValidator
from relay.core.config import Config
from relay.core.errors import GatewayError, RequestValidationError
from relay.core.gateway import ChatGateway
from relay.core.logging import ConversationLogger, conversation_logger

router = APIRouter()


def get_gateway(request: Request) -> ChatGateway:
    return request.app.state.gateway


def get_settings(request: Request) -> Config:
    return request.app.state.config


def _new_request_id() -> str:
    return uuid.uuid4().hex[:8]


@router.options("/{path:path}")
async def preflight(path: str) -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post("/chat")
async def legacy_chat(
    http_request: Request,
    authorization: str | None = Header(None),
    gateway: ChatGateway = Depends(get_gateway),
    settings: Config = Depends(get_settings),
) -> Response:
    """Legacy endpoint: plain round-robin, no failover, native fragment stream."""
    request_id = _new_request_id()

    with ConversationLogger.correlation_context(request_id):
        if not AuthGuard.authorize(authorization, settings.legacy_api_key):
            conversation_logger.warning("⛔ Unauthorized access attempt")
            return plain_text("Unauthorized", 401)

        try:
            body = json.loads(await http_request.body())
            raw_messages = body.get("messages") if isinstance(body, dict) else None
            if not isinstance(raw_messages, list):
                return plain_text("Invalid body: 'messages' array is required", 400)
            messages = [RequestValidator.message_from_dict(m) for m in raw_messages]

            entry, _ = gateway.next_legacy_provider()
            conversation_logger.info(f"🔄 Rotating to service: {entry.display_name}")
            conversation_logger.info(f"📨 Message count: {len(messages)}")

            stream = await entry.capability.stream_chat(messages)
        except RequestValidationError as e:
            return plain_text(e.message, 400)
        except Exception as e:
            conversation_logger.error(f"❌ Error processing request: {e}")
            return plain_text("Invalid JSON or Internal Server Error", 400)

        return streaming_response(stream=to_raw_sse(stream, provider=entry.display_name))


@router.get("/v1/models")
async def list_models(
    authorization: str | None = Header(None),
    gateway: ChatGateway = Depends(get_gateway),
    settings: Config = Depends(get_settings),
) -> JSONResponse:
    require_bearer(settings.api_key, authorization)
    return JSONResponse(
        content={
            "object": "list",
            "data": [{"id": model, "object": "model"} for model in gateway.models],
        }
    )


@router.post("/v1/chat/completions")
async def chat_completions(
    http_request: Request,
    authorization: str | None = Header(None),
    gateway: ChatGateway = Depends(get_gateway),
    settings: Config = Depends(get_settings),
) -> Response:
    require_bearer(settings.api_key, authorization)
    request_id = _new_request_id()

    with ConversationLogger.correlation_context(request_id):
        validator = RequestValidator(gateway.models, gateway.registry)
        request = validator.validate(await http_request.body())

        prompt_chars = sum(len(message.content) for message in request.messages)
        conversation_logger.debug(
            f"OpenAI request: {len(request.messages)} messages ({prompt_chars} chars)"
        )

        try:
            result = await gateway.dispatch(request.messages, request.pinned)
        except GatewayError:
            raise
        except Exception as e:
            conversation_logger.error(f"❌ Unexpected dispatch error: {e}")
            return ErrorResponseBuilder.server_error()

        conversation_logger.info(
            f"🤖 Provider: {result.entry.display_name} | model: {request.model}"
        )

        response_id = new_response_id()
        created = unix_now()

        if request.stream:
            return streaming_response(
                stream=to_sse(
                    result.stream,
                    response_id,
                    created,
                    request.model,
                    provider=result.entry.display_name,
                )
            )

        try:
            completion = await to_aggregate(result.stream, response_id, created, request.model)
        except Exception as e:
            conversation_logger.error(f"❌ Generator error from {result.entry.display_name}: {e}")
            return ErrorResponseBuilder.server_error()

        return JSONResponse(content=completion)


@router.get("/health")
async def health_check(gateway: ChatGateway = Depends(get_gateway)) -> dict[str, Any]:
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "providers": gateway.registry.names(),
        "models": list(gateway.models),
    }
