"""Embedding generation for documents and queries"""

import os
import asyncio
import logging
from typing import List

from openai import AsyncOpenAI

from ..config import get_config

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """Generate embeddings through an OpenAI-compatible embeddings endpoint"""

    def __init__(self, config=None):
        """Initialize embedding generator"""
        if config is None:
            config = get_config()

        self.config = config
        self.client = AsyncOpenAI(
            api_key=os.getenv(config.embedding.api_key_env) or "not-needed",
            base_url=config.embedding.base_url,
        )
        self.model = config.embedding.model
        self.batch_size = config.embedding.batch_size

        logger.info(f"Initialized embedding generator with model: {self.model}")

    async def _generate_batch(self, batch: List[str], batch_num: int, total_batches: int) -> List[List[float]]:
        logger.debug(f"Calling embeddings API for batch {batch_num}/{total_batches} ({len(batch)} texts)...")
        try:
            response = await self.client.embeddings.create(
                model=self.model,
                input=batch,
            )
        except Exception as e:
            logger.error(f"Error generating embeddings for batch {batch_num}: {e}")
            raise

        return [item.embedding for item in response.data]

    async def generate(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for a list of texts.

        Batches are dispatched concurrently and awaited jointly; the result
        keeps the input order.
        """
        if not texts:
            return []

        batches = [
            texts[i : i + self.batch_size]
            for i in range(0, len(texts), self.batch_size)
        ]
        total_batches = len(batches)

        logger.info(f"Starting embedding generation for {len(texts)} texts in {total_batches} batches")

        results = await asyncio.gather(
            *(
                self._generate_batch(batch, batch_num, total_batches)
                for batch_num, batch in enumerate(batches, 1)
            )
        )

        all_embeddings = [embedding for batch in results for embedding in batch]
        logger.info(f"✓ Generated all {len(all_embeddings)} embeddings successfully")
        return all_embeddings

    async def generate_one(self, text: str) -> List[float]:
        """Generate embedding for a single text"""
        embeddings = await self.generate([text])
        return embeddings[0] if embeddings else []
