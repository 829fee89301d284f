"""Document ingestion: chunking, web pages and sample documents"""

import re
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import get_config
from ..schema import DocumentInput

logger = logging.getLogger(__name__)


SAMPLE_DOCUMENTS = [
    DocumentInput(
        content=(
            "Artificial Intelligence (AI) refers to the simulation of human intelligence "
            "in machines that are programmed to think and learn like humans. AI systems "
            "can perform tasks such as visual perception, speech recognition, "
            "decision-making and language translation."
        ),
        metadata={"source": "AI Basics", "category": "technology", "type": "definition"},
    ),
    DocumentInput(
        content=(
            "Machine Learning is a subset of artificial intelligence that enables systems "
            "to learn and improve from experience without being explicitly programmed. "
            "It relies on algorithms that find patterns in data and use them to make "
            "predictions on new inputs."
        ),
        metadata={"source": "ML Fundamentals", "category": "machine-learning", "type": "definition"},
    ),
    DocumentInput(
        content=(
            "RAG (Retrieval-Augmented Generation) combines a retriever that fetches "
            "relevant documents from a knowledge base with a generator that writes an "
            "answer grounded in those documents. Grounding reduces hallucination and "
            "lets the system cite its sources."
        ),
        metadata={"source": "RAG Architecture", "category": "ai-architecture", "type": "explanation"},
    ),
]


def strip_html(html: str) -> str:
    """Reduce an HTML page to its visible text"""
    text = re.sub(r"<script[\s\S]*?</script>", " ", html, flags=re.IGNORECASE)
    text = re.sub(r"<style[\s\S]*?</style>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def chunk_text(text: str, chunk_size: int = 1200, overlap: int = 100) -> List[str]:
    """
    Split text into fixed-width windows that overlap by `overlap` characters.

    Args:
        text: Text to chunk
        chunk_size: Window width in characters
        overlap: Characters shared by consecutive windows (must be < chunk_size)

    Returns:
        List of text chunks
    """
    if overlap >= chunk_size:
        raise ValueError("overlap must be smaller than chunk_size")

    chunks = []
    start = 0
    while start < len(text):
        end = min(start + chunk_size, len(text))
        chunks.append(text[start:end])
        if end == len(text):
            break
        start = end - overlap
    return chunks


class DocumentIngester:
    """Turn raw text and web pages into documents in the knowledge store"""

    def __init__(self, store, config=None, http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize ingester.

        Args:
            store: KnowledgeStore to write into
            config: Optional configuration object
            http_client: Optional httpx client used for URL fetches
        """
        if config is None:
            config = get_config()

        self.config = config
        self.store = store
        self.http_client = http_client

    def text_to_documents(self, text: str, metadata: Dict[str, Any]) -> List[DocumentInput]:
        """Chunk text and attach metadata plus the chunk index to each piece"""
        chunks = chunk_text(
            text,
            chunk_size=self.config.corpus.chunk_size,
            overlap=self.config.corpus.chunk_overlap,
        )
        return [
            DocumentInput(content=chunk, metadata={**metadata, "chunk": i})
            for i, chunk in enumerate(chunks)
        ]

    async def ingest_text(self, text: str, metadata: Optional[Dict[str, Any]] = None) -> int:
        """Ingest raw text directly. Returns the number of chunks added."""
        documents = self.text_to_documents(text, metadata or {})
        if not documents:
            logger.warning("No chunks created from text")
            return 0
        return await self.store.add(documents)

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.text

    async def ingest_urls(self, urls: List[str]) -> Dict[str, Any]:
        """
        Fetch, strip and ingest each URL. A failing URL is reported and skipped.

        Returns:
            {"added_count": int, "errors": [{"url": str, "error": str}]}
        """
        added = 0
        errors = []

        client = self.http_client or httpx.AsyncClient(timeout=self.config.corpus.fetch_timeout)
        try:
            for url in urls:
                try:
                    html = await self._fetch(client, url)
                    text = strip_html(html)[: self.config.corpus.max_document_chars]
                    documents = self.text_to_documents(
                        text,
                        {"source": url, "category": "web", "type": "article"},
                    )
                    added += await self.store.add(documents)
                    logger.info(f"Ingested {len(documents)} chunks from {url}")
                except Exception as e:
                    logger.error(f"Failed to ingest {url}: {e}")
                    errors.append({"url": url, "error": str(e)})
        finally:
            if self.http_client is None:
                await client.aclose()

        return {"added_count": added, "errors": errors}

    async def load_sample_documents(self) -> int:
        """Seed the store with a few introductory AI documents"""
        count = await self.store.add(SAMPLE_DOCUMENTS)
        logger.info(f"Loaded {count} sample documents")
        return count
