"""Multi-probe retrieval for Quarry."""

import logging

from quarry.stores import VectorStore

logger = logging.getLogger(__name__)

# Document-agnostic probes; each pulls a different region of the embedding space.
PROBE_QUERIES: tuple[str, ...] = (
    "key concepts and main topics",
    "technical details and specifications",
    "practical applications and examples",
    "important definitions and terminology",
    "processes and procedures described",
)

CHUNK_SEPARATOR = "\n\n---\n\n"
PROBE_SEPARATOR = "\n\n========\n\n"


async def retrieve_context(
    store: VectorStore,
    probe_queries: list[str] | tuple[str, ...] = PROBE_QUERIES,
    per_probe_k: int = 2,
) -> str:
    """Run each probe through the store and merge the matches into one context block.

    Probes run one after another. A probe's matches are joined with CHUNK_SEPARATOR;
    probe blocks are joined with PROBE_SEPARATOR. Probes with no matches add nothing.

    Returns:
        The merged context, or "" if no probe matched anything.
    """
    blocks = []
    for probe in probe_queries:
        chunks = await store.similarity_search(probe, k=per_probe_k)
        if not chunks:
            logger.debug("Probe %r matched no chunks", probe)
            continue
        blocks.append(CHUNK_SEPARATOR.join(chunk.text for chunk in chunks))

    return PROBE_SEPARATOR.join(blocks)


class Retriever:
    """Builds a generation context from a vector store using fixed probe queries."""

    def __init__(
        self,
        probe_queries: list[str] | tuple[str, ...] = PROBE_QUERIES,
        per_probe_k: int = 2,
    ) -> None:
        """Initialize the retriever.

        Args:
            probe_queries: Queries to run against the store, in order.
            per_probe_k: Chunks to keep per probe.
        """
        if per_probe_k < 1:
            raise ValueError("per_probe_k must be at least 1")
        self.probe_queries = tuple(probe_queries)
        self.per_probe_k = per_probe_k

    async def aretrieve(self, store: VectorStore) -> str:
        """Retrieve the merged context for this retriever's probes."""
        return await retrieve_context(store, self.probe_queries, self.per_probe_k)
