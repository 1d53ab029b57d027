"""Pydantic models for API I/O and the chat pipeline contracts.

CatalogItem is the read-only snapshot the chat core works with; agents
return ResolverResult, the service returns ChatAnswer.
"""
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional


class CatalogItem(BaseModel):
    id: int
    name: str = ""
    description: Optional[str] = None
    specs: Optional[str] = None
    price: Optional[Decimal] = None
    in_stock: bool = False
    release_date: Optional[datetime] = None
    brands: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class ResolverResult(BaseModel):
    agent: str
    intent: str
    items: List[CatalogItem] = Field(default_factory=list)
    basis: Optional[str] = None  # "sales" | "ratings" for best-selling


class ChatAnswer(BaseModel):
    answer: str
    sources: List[CatalogItem] = Field(default_factory=list)


class ChatRequest(BaseModel):
    question: Optional[str] = None


class SourceItem(BaseModel):
    id: int
    name: str
    price: Optional[float] = None


class ChatResponse(BaseModel):
    answer: str
    sources: List[SourceItem] = Field(default_factory=list)
