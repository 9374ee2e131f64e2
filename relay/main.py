import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay import __version__
from relay.api.endpoints import router as api_router
from relay.api.middleware import CORSHeadersMiddleware
from relay.api.services.error_handling import (
    gateway_error_handler,
    plain_text,
    unexpected_error_handler,
)
from relay.core.config import Config, config
from relay.core.errors import GatewayError
from relay.core.gateway import ChatGateway
from relay.core.logging import configure_root_logging, parse_log_level

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # Unknown paths and unsupported methods on known paths look the same to clients.
    if exc.status_code in (404, 405):
        return plain_text("Not found", 404)
    return plain_text(str(exc.detail), exc.status_code)


def create_app(gateway: ChatGateway | None = None, settings: Config | None = None) -> FastAPI:
    """Build the ASGI app.

    When no gateway is passed, one is built from ``settings`` on startup and
    its upstream clients are closed on shutdown.
    """
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.gateway is None
        if owned:
            app.state.gateway = ChatGateway.from_config(settings)
        try:
            yield
        finally:
            if owned:
                await app.state.gateway.aclose()
                app.state.gateway = None

    app = FastAPI(title="Relay Gateway", version=__version__, lifespan=lifespan)
    app.state.gateway = gateway
    app.state.config = settings

    app.add_middleware(CORSHeadersMiddleware)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)  # type: ignore[arg-type]
    app.include_router(api_router)

    return app


configure_root_logging(config.log_level)
app = create_app()


def main() -> None:
    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"Relay Gateway v{__version__}")
        print("")
        print("Usage: python -m relay.main")
        print("       or: relay start")
        print("")
        print("Required environment variables:")
        print("  API_KEY - Bearer secret for /v1/* (falls back to RELAY_API_KEY, OPENAI_API_KEY)")
        print("  At least one of GROQ_API_KEY, CEREBRAS_API_KEY, GEMINI_API_KEY,")
        print("  OPENROUTER_API_KEY")
        print("")
        print("Optional environment variables:")
        print("  RELAY_API_KEY - Bearer secret for the legacy /chat endpoint")
        print("  RELAY_PROVIDERS - Rotation order (default: groq,cerebras,gemini,openrouter)")
        print("  MODELS - Comma-separated model allow-list (default: relay-chat)")
        print("  HOST - Server host (default: 0.0.0.0)")
        print("  PORT - Server port (default: 3000)")
        print("  LOG_LEVEL - Logging level (default: INFO)")
        print("  REQUEST_TIMEOUT - Request timeout in seconds (default: 90)")
        print("")
        print("For more options, use the relay CLI:")
        print("  relay config show      - Show current configuration")
        print("  relay config validate  - Validate environment variables")
        print("  relay providers        - List the provider catalog")
        sys.exit(0)

    # Configuration summary
    print(f"🚀 Relay Gateway v{__version__}")
    print("✅ Configuration loaded successfully")
    print(f"   API Key : {config.api_key_hash}")
    print(f"   Models  : {', '.join(config.models)}")
    print(f"   Providers: {', '.join(config.provider_order)}")
    print(f"   Request Timeout : {config.request_timeout}s")
    print(f"   Server: {config.host}:{config.port}")
    print("")

    log_level = parse_log_level(config.log_level).lower()

    uvicorn.run(
        "relay.main:app",
        host=config.host,
        port=config.port,
        log_level=log_level,
        access_log=log_level == "debug",
        reload=False,
    )


if __name__ == "__main__":
    main()
