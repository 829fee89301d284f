"""Knowledge store backed by Qdrant"""

import os
import json
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from uuid import uuid4

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import Distance, VectorParams, PointStruct

from ..config import get_config
from ..corpus.embed import EmbeddingGenerator
from ..schema import DocumentInput, RetrievedDocument

logger = logging.getLogger(__name__)

# Payload keys that may hold the document text in collections not written by us
CONTENT_KEYS = ["content", "text", "page_content", "chunk", "document", "body", "data", "summary"]


def extract_content(payload: Optional[Dict[str, Any]]) -> str:
    """Find the document text in a point payload of unknown layout"""
    if not payload:
        return ""

    nested = payload.get("payload") if isinstance(payload.get("payload"), dict) else {}
    for key in CONTENT_KEYS:
        value = payload.get(key, nested.get(key))
        if isinstance(value, str) and value.strip():
            return value
        if isinstance(value, list):
            joined = " ".join(str(v) for v in value if v).strip()
            if joined:
                return joined
        if isinstance(value, dict) and value:
            return json.dumps(value)

    # Single string field payloads
    for value in payload.values():
        if isinstance(value, str):
            return value
    return ""


def extract_source(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    """Find a source identifier in a point payload of unknown layout"""
    if not payload:
        return None
    metadata = payload.get("metadata") if isinstance(payload.get("metadata"), dict) else {}
    return (
        payload.get("source")
        or payload.get("url")
        or payload.get("link")
        or metadata.get("source")
        or payload.get("file")
    )


def payload_to_document(payload: Optional[Dict[str, Any]], score: float) -> RetrievedDocument:
    """Convert a Qdrant payload into a RetrievedDocument"""
    payload = payload or {}
    if "content" in payload and isinstance(payload.get("metadata"), dict):
        metadata = dict(payload["metadata"])
    else:
        metadata = dict(payload)

    if not metadata.get("source"):
        source = extract_source(payload)
        if source:
            metadata["source"] = source

    return RetrievedDocument(
        content=extract_content(payload),
        metadata=metadata,
        score=score,
    )


class KnowledgeStore:
    """Similarity search and document ingestion over one Qdrant collection"""

    def __init__(
        self,
        config=None,
        client: Optional[AsyncQdrantClient] = None,
        embedder: Optional[EmbeddingGenerator] = None,
    ):
        """
        Initialize the store. No network call happens until init().

        Args:
            config: Optional configuration object
            client: Optional pre-built Qdrant client
            embedder: Optional embedding generator
        """
        if config is None:
            config = get_config()

        self.config = config
        self.collection_name = config.vector_db.collection_name

        if client is None:
            if config.vector_db.url:
                client = AsyncQdrantClient(
                    url=config.vector_db.url,
                    api_key=os.getenv(config.vector_db.api_key_env),
                )
            else:
                client = AsyncQdrantClient(
                    host=config.vector_db.host,
                    port=config.vector_db.port,
                )
        self.client = client
        self.embedder = embedder or EmbeddingGenerator(config)

    @property
    def location(self) -> str:
        if self.config.vector_db.url:
            return self.config.vector_db.url
        return f"{self.config.vector_db.host}:{self.config.vector_db.port}"

    async def init(self) -> None:
        """
        Connect and make sure the collection exists.

        Raises:
            ConnectionError: If Qdrant cannot be reached
        """
        try:
            collections = (await self.client.get_collections()).collections
        except Exception as e:
            error_msg = (
                f"Failed to connect to Qdrant at {self.location}. "
                f"Is Qdrant running? ({e})"
            )
            logger.error(error_msg)
            raise ConnectionError(error_msg) from e

        names = [c.name for c in collections]
        logger.info(f"Connected to Qdrant at {self.location}, collections: {names}")

        if self.collection_name not in names:
            logger.info(f"Creating collection: {self.collection_name}")
            await self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(
                    size=self.config.embedding.dimensions,
                    distance=Distance(self.config.vector_db.distance),
                ),
            )
        else:
            logger.info(f"Collection already exists: {self.collection_name}")

    async def add(self, documents: Sequence[Union[DocumentInput, Dict[str, Any]]]) -> int:
        """
        Embed and upsert documents.

        Args:
            documents: DocumentInput objects or {"content", "metadata"} dicts

        Returns:
            Number of documents written
        """
        docs = [
            doc if isinstance(doc, DocumentInput) else DocumentInput(**doc)
            for doc in documents
        ]
        if not docs:
            logger.warning("No documents to add")
            return 0

        embeddings = await self.embedder.generate([doc.content for doc in docs])

        points = [
            PointStruct(
                id=str(uuid4()),
                vector=embedding,
                payload={"content": doc.content, "metadata": doc.metadata},
            )
            for doc, embedding in zip(docs, embeddings)
        ]

        await self.client.upsert(
            collection_name=self.collection_name,
            points=points,
            wait=True,
        )

        logger.info(f"✓ Successfully added {len(points)} documents to {self.collection_name}")
        return len(points)

    async def search(self, query: str, k: int = 5) -> List[RetrievedDocument]:
        """Return the k documents most similar to the query"""
        logger.debug(f"Searching {self.collection_name} for: '{query}' (k={k})")

        query_vector = await self.embedder.generate_one(query)

        results = (
            await self.client.query_points(
                collection_name=self.collection_name,
                query=query_vector,
                limit=k,
                with_payload=True,
            )
        ).points

        documents = [payload_to_document(r.payload, r.score) for r in results]

        logger.info(f"Search '{query[:60]}' (k={k}): Found {len(documents)} results")
        if documents:
            logger.debug(f"  Top result score: {documents[0].score:.3f}")

        return documents

    async def count(self) -> int:
        """Number of points in the collection"""
        info = await self.client.get_collection(self.collection_name)
        return info.points_count or 0

    async def info(self) -> Dict[str, Any]:
        """Get information about the collection"""
        info = await self.client.get_collection(self.collection_name)
        vectors = info.config.params.vectors
        return {
            "collection_name": self.collection_name,
            "points_count": info.points_count or 0,
            "vector_size": getattr(vectors, "size", None),
            "distance": getattr(getattr(vectors, "distance", None), "value", None),
            "status": getattr(info.status, "value", str(info.status)),
        }

    async def clear(self) -> None:
        """Delete all documents by dropping and re-creating the collection"""
        logger.warning(f"Deleting collection: {self.collection_name}")
        await self.client.delete_collection(self.collection_name)
        await self.init()

    async def close(self) -> None:
        await self.client.close()


# Process-wide store instance
_store: Optional[KnowledgeStore] = None
_store_lock = asyncio.Lock()


async def get_store(config=None) -> KnowledgeStore:
    """Get or create the shared knowledge store (initialised once)"""
    global _store
    if _store is not None:
        return _store

    async with _store_lock:
        if _store is None:
            store = KnowledgeStore(config)
            await store.init()
            _store = store
    return _store


async def reset_store() -> None:
    """Close and forget the shared store"""
    global _store
    async with _store_lock:
        if _store is not None:
            await _store.close()
            _store = None
