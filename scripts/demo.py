#!/usr/bin/env python3
"""
Demo script for the chat completion emulator.

This script drives the completion service in-process: a cache miss, a cache
hit, a role-reordered request that lands on the same cache entry, and a
streamed reply delivered fragment by fragment.
"""

import asyncio
import time

from chat_emulator import (
    ChatMessageEntity,
    CompletionService,
    InMemoryCacheRepository,
    InMemoryConversationRepository,
    PlaceholderCompletionGenerator,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_service() -> CompletionService:
    return CompletionService.create(
        conversations=InMemoryConversationRepository.create(),
        cache=InMemoryCacheRepository.create(),
        generator=PlaceholderCompletionGenerator.create(),
    )


async def demo_caching(service: CompletionService) -> None:
    """Demonstrate cache misses and hits."""
    print_section("Response Cache")

    messages = [
        ChatMessageEntity(role="system", content="You are a helpful assistant."),
        ChatMessageEntity(role="user", content="What is a response cache?"),
    ]
    reordered = list(reversed(messages))

    for label, request in [
        ("first request", messages),
        ("same request again", messages),
        ("roles interleaved differently", reordered),
    ]:
        start = time.time()
        result = await service.complete(request)
        duration = (time.time() - start) * 1000
        status = "HIT " if result.cached else "MISS"
        print(f"\n  {label}")
        print(f"  {status} in {duration:.2f}ms - conversation {result.conversation_id[:8]}")
        print(f"  Reply: {result.content}")


async def demo_streaming(service: CompletionService) -> None:
    """Demonstrate streamed replies."""
    print_section("Streaming")

    messages = [ChatMessageEntity(role="user", content=f"turn {i}") for i in range(3)]

    for label in ("miss (paced)", "hit (replayed at once)"):
        print(f"\n  {label}:")
        print("  ", end="", flush=True)
        start = time.time()
        fragments = 0
        async for fragment in service.stream(messages):
            fragments += 1
            print(fragment, end="", flush=True)
        duration = (time.time() - start) * 1000
        print(f"\n  {fragments} fragment(s) in {duration:.0f}ms")


def main() -> None:
    """Run all demos."""
    print("\n🚀 Chat Completion Emulator Demo")
    print("=" * 70)

    service = build_service()
    asyncio.run(demo_caching(service))
    asyncio.run(demo_streaming(service))

    print_section("Stats")
    for key, value in service.get_stats().items():
        print(f"  {key:<22} {value}")


if __name__ == "__main__":
    main()
