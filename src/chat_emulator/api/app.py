"""FastAPI application exposing the emulated chat completion API."""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_emulator.api.dependencies import HandlerDep, lifespan
from chat_emulator.config import Settings, settings
from chat_emulator.dto import HealthCheckResponse, StatsResponse

BANNER = (
    "Chat completion emulator\n"
    "POST /chat/completions with an OpenAI-style body "
    '({"model": ..., "messages": [...], "stream": false}).\n'
)


async def not_found(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer unknown paths and unsupported methods with a plain-text 404."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        app_settings: Explicit settings (e.g. zero token delay for tests).
                      If None, the environment-driven settings are used.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Chat Completion Emulator",
        description="OpenAI-style chat completions with response caching and synthetic streaming",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings or settings

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, not_found)  # type: ignore[arg-type]

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Root endpoint describing the API."""
        return BANNER

    @app.post("/chat/completions")
    @app.post("/v1/chat/completions", include_in_schema=False)
    async def chat_completions(request: Request, handler: HandlerDep) -> Response:
        """
        Create a chat completion.

        Replays a cached reply when the normalized messages were answered
        before; otherwise generates one. Set ``"stream": true`` for
        server-sent events.
        """
        return await handler.chat_completions(request)

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/stats", response_model=StatsResponse)
    async def stats(handler: HandlerDep) -> StatsResponse:
        """Get store sizes and cache metrics."""
        return await handler.get_stats()

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "chat_emulator.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
