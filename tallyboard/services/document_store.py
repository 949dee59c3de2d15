"""Document store addressed by collection and document id."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tallyboard.exceptions import StoreUnavailable
from tallyboard.models.document import StoredDocument
from tallyboard.utils.logger import logger


class DocumentStore(ABC):
    """Abstract base class for document store backends.

    Writes are full-document overwrites; the last writer wins.
    """

    @abstractmethod
    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a document.

        Args:
            collection: Collection name
            document_id: Document id within the collection

        Returns:
            A copy of the document data, or None if it does not exist

        Raises:
            StoreUnavailable: If the backend fails
        """
        pass

    @abstractmethod
    def set(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        """
        Create or overwrite a document.

        Args:
            collection: Collection name
            document_id: Document id within the collection
            data: Full document contents

        Raises:
            StoreUnavailable: If the backend fails
        """
        pass

    @abstractmethod
    def list_documents(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        """
        Fetch every document in a collection, in no particular order.

        Args:
            collection: Collection name

        Returns:
            List of (document_id, data) pairs

        Raises:
            StoreUnavailable: If the backend fails
        """
        pass


class SQLDocumentStore(DocumentStore):
    """Document store kept in a single SQLAlchemy table."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        """
        Initialize the SQL document store.

        Args:
            session_factory: Callable returning a new Session. Defaults to SessionLocal
        """
        if session_factory is None:
            from tallyboard.database import SessionLocal

            session_factory = SessionLocal
        self.session_factory = session_factory

    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        db = self.session_factory()
        try:
            doc = self._find(db, collection, document_id)
            return dict(doc.data or {}) if doc else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {collection}/{document_id}: {e}")
            raise StoreUnavailable(f"Could not read {collection}/{document_id}") from e
        finally:
            db.close()

    def set(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        db = self.session_factory()
        try:
            doc = self._find(db, collection, document_id)
            if doc:
                doc.data = dict(data)
                db.commit()
            else:
                try:
                    db.add(
                        StoredDocument(
                            collection=collection,
                            document_id=document_id,
                            data=dict(data),
                        )
                    )
                    db.commit()
                except IntegrityError:
                    # Another writer created it first; overwrite theirs
                    db.rollback()
                    doc = self._find(db, collection, document_id)
                    if not doc:
                        raise
                    doc.data = dict(data)
                    db.commit()
            logger.debug(f"Saved {collection}/{document_id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving {collection}/{document_id}: {e}")
            raise StoreUnavailable(f"Could not write {collection}/{document_id}") from e
        finally:
            db.close()

    def list_documents(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        db = self.session_factory()
        try:
            docs = (
                db.query(StoredDocument)
                .filter(StoredDocument.collection == collection)
                .all()
            )
            return [(doc.document_id, dict(doc.data or {})) for doc in docs]
        except SQLAlchemyError as e:
            logger.error(f"Error listing collection {collection}: {e}")
            raise StoreUnavailable(f"Could not list {collection}") from e
        finally:
            db.close()

    def _find(
        self, db: Session, collection: str, document_id: str
    ) -> Optional[StoredDocument]:
        return (
            db.query(StoredDocument)
            .filter(
                StoredDocument.collection == collection,
                StoredDocument.document_id == document_id,
            )
            .first()
        )


# Document store singleton
_document_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """
    Get the configured document store instance.

    The store is created once and reused for all requests.
    """
    global _document_store

    if _document_store is None:
        _document_store = SQLDocumentStore()

    return _document_store


def reset_document_store() -> None:
    """Reset the document store singleton. Useful for testing."""
    global _document_store
    _document_store = None
