"""Stored document model backing the collection/document store."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, UniqueConstraint
from tallyboard.database import Base


class StoredDocument(Base):
    """
    A JSON document addressed by ``(collection, document_id)``.

    Day snapshots live in collection ``tallies`` keyed by ``YYYY-MM-DD``;
    global settings live in collection ``globalSettings``.
    """

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(100), nullable=False)
    document_id = Column(String(200), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("collection", "document_id", name="uq_documents_collection_id"),
        Index("idx_documents_collection", "collection"),
    )

    def __repr__(self):
        return f"<StoredDocument(collection={self.collection}, id={self.document_id})>"
