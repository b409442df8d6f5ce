"""Initial data: populate the in-memory graph from GRAPH_SEED_FILE or GRAPH_SEED_RECORDS."""

import logging

from code_executor.core.config import settings
from code_executor.core.memory import get_graph_store, seed_graph_store

logger = logging.getLogger(__name__)


def init() -> int:
    """Seed the shared store. Remote backends own their data, so nothing is loaded."""
    if settings.MEMORY_BACKEND != "memory":
        logger.info("Remote memory backend: skipping graph seed")
        return 0
    count = seed_graph_store(get_graph_store())
    if count:
        logger.info("Seeded graph with %d entities", count)
    return count


def main() -> None:
    """Dry run: load the configured seed into a store and report what it holds."""
    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info("Loading initial data")
    count = init()
    logger.info("Initial data loaded: %d entities", count)


if __name__ == "__main__":
    main()
