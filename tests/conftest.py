"""Shared fixtures for the chat emulator tests."""

import pytest
from fastapi.testclient import TestClient

from chat_emulator.api.app import create_app
from chat_emulator.config import Settings
from chat_emulator.entities import ChatMessageEntity
from chat_emulator.handlers import CompletionHandler
from chat_emulator.protocols import CompletionGenerationError
from chat_emulator.repositories import (
    InMemoryCacheRepository,
    InMemoryConversationRepository,
    PlaceholderCompletionGenerator,
)
from chat_emulator.services import CompletionService


class CountingGenerator(PlaceholderCompletionGenerator):
    """Placeholder generator that records how often it runs."""

    def __init__(self) -> None:
        super().__init__(token_delay=0.0)
        self.generate_calls = 0
        self.stream_calls = 0

    async def generate(self, messages):
        self.generate_calls += 1
        return await super().generate(messages)

    async def stream(self, messages):
        self.stream_calls += 1
        async for fragment in super().stream(messages):
            yield fragment


class FailingGenerator:
    """Generator backend that always fails, after one fragment when streaming."""

    @property
    def name(self) -> str:
        return "failing"

    async def generate(self, messages):
        raise CompletionGenerationError("backend unavailable")

    async def stream(self, messages):
        yield "partial"
        raise CompletionGenerationError("backend unavailable")


@pytest.fixture
def test_settings():
    """Settings with pacing disabled so streamed replies arrive at once."""
    return Settings(token_delay=0.0)


@pytest.fixture
def client(test_settings):
    """Create a test client with the lifespan running."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(client):
    """Test client whose handler is backed by a failing generator."""
    service = CompletionService.create(
        conversations=InMemoryConversationRepository.create(),
        cache=InMemoryCacheRepository.create(),
        generator=FailingGenerator(),
    )
    client.app.state.completion_handler = CompletionHandler(completion_service=service)
    return client


@pytest.fixture
def generator():
    return CountingGenerator()


@pytest.fixture
def failing_generator():
    return FailingGenerator()


@pytest.fixture
def service(generator):
    """Completion service over fresh in-memory stores."""
    return CompletionService.create(
        conversations=InMemoryConversationRepository.create(
            max_history=50, max_conversations=1000, evict_fraction=0.3
        ),
        cache=InMemoryCacheRepository.create(eviction_probability=0.1),
        generator=generator,
    )


@pytest.fixture
def messages():
    return [
        ChatMessageEntity(role="user", content="hi"),
        ChatMessageEntity(role="system", content="be brief"),
        ChatMessageEntity(role="assistant", content="hello"),
        ChatMessageEntity(role="user", content="how are you?"),
    ]
