"""Application wiring for the chat emulator.

The lifespan builds the in-memory stores, the placeholder generator, the
completion service and its HTTP handler, and starts the background cache
sweeper. Everything lives on app.state for the life of the process;
routes reach the handler through the HandlerDep alias. Shutdown cancels
the sweeper before the state is dropped.
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from chat_emulator.config import Settings, settings, setup_logging
from chat_emulator.handlers import CompletionHandler
from chat_emulator.repositories import (
    InMemoryCacheRepository,
    InMemoryConversationRepository,
    PlaceholderCompletionGenerator,
)
from chat_emulator.services import CacheSweeper, CompletionService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> CompletionHandler:
    """Dependency injection for CompletionHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "completion_handler", None)
    if handler is None:
        raise RuntimeError("CompletionHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (two in-memory stores, placeholder generator)
    2. Service (business logic) - stored in app.state.completion_service
    3. Handler (HTTP endpoints) - stored in app.state.completion_handler
    4. Cache sweeper - background task, cancelled on shutdown

    Settings come from app.state.settings when create_app() was given
    explicit ones, otherwise from the environment.
    """
    app_settings: Settings = getattr(app.state, "settings", None) or settings
    setup_logging(app_settings)

    conversations = InMemoryConversationRepository.create(
        max_history=app_settings.max_history_length,
        max_conversations=app_settings.max_conversations,
        evict_fraction=app_settings.conversation_evict_fraction,
    )
    cache = InMemoryCacheRepository.create(
        eviction_probability=app_settings.cache_eviction_probability,
    )
    generator = PlaceholderCompletionGenerator.create(token_delay=app_settings.token_delay)

    completion_service = CompletionService.create(
        conversations=conversations,
        cache=cache,
        generator=generator,
    )
    completion_handler = CompletionHandler(
        completion_service=completion_service,
        default_model=app_settings.default_model,
    )
    sweeper = CacheSweeper(cache, interval=app_settings.cache_sweep_interval)
    sweeper.start()

    # Store in app.state (FastAPI pattern)
    app.state.completion_service = completion_service
    app.state.completion_handler = completion_handler
    app.state.cache_sweeper = sweeper

    logger.info("Completion service initialized (generator: %s)", generator.name)
    logger.info(
        "History: %d messages x %d conversations; cache sweep every %.0fs at p=%.2f",
        conversations.max_history,
        conversations.max_conversations,
        sweeper.interval,
        cache.eviction_probability,
    )

    yield

    await sweeper.stop()

    # Cleanup - remove from app.state
    del app.state.completion_handler
    del app.state.completion_service
    del app.state.cache_sweeper
    logger.info("Completion service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CompletionHandler, Depends(get_handler)]