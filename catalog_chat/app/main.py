#!/usr/bin/env python3
"""
Main FastAPI application for the product catalog chat.
"""

import threading
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .controller import ChatService
from ..schemas.io_models import ChatRequest, ChatResponse, SourceItem

# Initialize FastAPI app
app = FastAPI(
    title="Product Catalog Chat API",
    description="Catalog-grounded product Q&A",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: Optional[ChatService] = None
_service_lock = threading.Lock()


def get_chat_service() -> ChatService:
    """Process-wide ChatService, built on first use."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = ChatService()
    return _service


@app.post("/api/chat/products", response_model=ChatResponse)
def ask_products(request: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """Answer a product question from the catalog."""
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question required")

    result = service.ask(request.question)
    sources = [
        SourceItem(id=p.id, name=p.name, price=float(p.price) if p.price is not None else None)
        for p in result.sources
    ]
    return ChatResponse(answer=result.answer, sources=sources)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
