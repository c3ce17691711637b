"""
Semantic Cache Example

Demonstrates paraphrased lookups against a configured vector index.

Configure the index through the environment (or a .env file):

    VECTOR_URL=https://<your-index>.upstash.io
    VECTOR_TOKEN=<token>
    MIN_PROXIMITY=0.9

Without VECTOR_URL the in-process memory index is used; its hashing
embedder only matches on shared vocabulary, so most paraphrases will miss.
"""

import asyncio
import logging

from semcache import SemanticCache
from semcache.config import AppConfig, load_config
from semcache.index import close_all_indexes, create_index

# Delay between writes and reads so the hosted index can make upserts queryable
DELAY_SECONDS = 1.0

# Demo entries live apart from the configured cache namespace; flushing
# at the end only clears this one
DEMO_NAMESPACE = "semcache-demo"

logger = logging.getLogger(__name__)


def build_cache(config: AppConfig) -> SemanticCache:
    return SemanticCache(
        index=create_index(config.index, name="demo"),
        min_proximity=config.cache.min_proximity,
        namespace=DEMO_NAMESPACE,
    )


async def lookup(cache, query: str) -> None:
    logger.info(f"{query} -> {await cache.get(query)}")


async def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    cache = build_cache(config)

    try:
        await cache.set("capital of france", "paris")
        await asyncio.sleep(DELAY_SECONDS)
        await lookup(cache, "france's capital")  # paris

        await cache.set("capital of France", "Paris")
        await asyncio.sleep(DELAY_SECONDS)
        await lookup(cache, "france's capital")  # Paris

        await cache.set("biggest city in USA", "New York")
        await asyncio.sleep(DELAY_SECONDS)
        await lookup(cache, "largest city in USA")  # New York

        await cache.set("year when Berlin wall fell", "1989")
        await asyncio.sleep(DELAY_SECONDS)
        await lookup(cache, "what year did the Berlin wall collapse")  # 1989

        await cache.set_many(
            ["chemical formula for water", "best drink on a hot day"],
            ["H2O", "water"],
        )
        await asyncio.sleep(DELAY_SECONDS)
        await lookup(cache, "what to drink when it's hot")  # water
        await lookup(cache, "what is water's chemical formula")  # H2O
    finally:
        await cache.flush()
        await close_all_indexes()


if __name__ == "__main__":
    asyncio.run(main())
