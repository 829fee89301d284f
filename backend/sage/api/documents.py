"""
Knowledge base API endpoints
"""

from fastapi import APIRouter, HTTPException
import logging

from .chat import timestamp
from .models import IngestUrlRequest, SearchRequest, UploadRequest
from ..config import get_config
from ..corpus.ingest import DocumentIngester
from ..database.vector_db import get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/documents", tags=["documents"])

PREVIEW_CHARS = 200


@router.post("/upload")
async def upload_documents(request: UploadRequest):
    """Add documents to the knowledge base"""
    try:
        store = await get_store()
        count = await store.add([doc.model_dump() for doc in request.documents])

        return {
            "success": True,
            "message": f"Successfully uploaded {count} documents",
            "document_count": count,
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Upload failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")


@router.post("/search")
async def search_documents(request: SearchRequest):
    """Similarity search with content previews"""
    try:
        store = await get_store()
        documents = await store.search(request.query, request.limit)

        results = []
        for i, doc in enumerate(documents):
            preview = doc.content[:PREVIEW_CHARS]
            if len(doc.content) > PREVIEW_CHARS:
                preview += "..."
            results.append({
                "id": i,
                "content": doc.content,
                "metadata": doc.metadata,
                "similarity": doc.score,
                "preview": preview,
            })

        return {
            "success": True,
            "query": request.query,
            "results": results,
            "result_count": len(results),
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Search failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Search failed: {str(e)}")


@router.get("/status")
async def knowledge_base_status():
    """Connection state and document count, with warnings"""
    try:
        config = get_config()
        store = await get_store()
        document_count = await store.count()

        issues = []
        if document_count == 0:
            issues.append("Knowledge base is empty - consider loading sample documents")

        return {
            "success": True,
            "status": {
                "vector_store": {
                    "status": "connected",
                    "document_count": document_count,
                    "collection_name": store.collection_name,
                },
                "environment": {
                    "primary_provider": config.model.primary,
                    "api_key": "configured" if config.get_api_key(config.model.primary) else "missing",
                    "qdrant": "cloud" if config.vector_db.url else "local",
                },
                "overall": "warning" if issues else "healthy",
                "issues": issues,
            },
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Status check failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Status check failed: {str(e)}")


@router.get("/info")
async def collection_info():
    """Collection details"""
    try:
        store = await get_store()
        info = await store.info()

        return {
            "success": True,
            "info": {
                **info,
                "document_count": info["points_count"],
                "status": "ready" if info["points_count"] > 0 else "empty",
            },
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Info request failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Info request failed: {str(e)}")


@router.delete("/clear")
async def clear_documents():
    """Delete every document in the knowledge base"""
    try:
        store = await get_store()
        await store.clear()

        return {
            "success": True,
            "message": "Knowledge base cleared successfully",
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Clear failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Clear failed: {str(e)}")


@router.post("/ingest-url")
async def ingest_url(request: IngestUrlRequest):
    """Fetch web pages and add their text to the knowledge base"""
    urls = request.all_urls()
    if not urls:
        raise HTTPException(status_code=400, detail="Provide url or urls")

    try:
        store = await get_store()
        report = await DocumentIngester(store).ingest_urls(urls)

        return {"success": True, **report, "timestamp": timestamp()}

    except Exception as e:
        logger.error(f"URL ingestion failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"URL ingestion failed: {str(e)}")


@router.post("/load-samples")
async def load_samples():
    """Seed the knowledge base with sample documents"""
    try:
        store = await get_store()
        count = await DocumentIngester(store).load_sample_documents()

        return {
            "success": True,
            "message": f"Loaded {count} sample documents",
            "document_count": count,
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Loading samples failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Loading samples failed: {str(e)}")
