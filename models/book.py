from __future__ import annotations

from sqlalchemy import Column, String, Text, Date, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base
from models.author import Author, AuthorRef


class Book(BaseModel, Base):
    __tablename__ = "books"
    __document_fields__ = ("title", "description", "publication_date")

    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    publication_date = Column(Date, nullable=True)

    # Author deletion is RESTRICTed while books still reference it
    author_id = Column(Integer, ForeignKey("authors.id", ondelete="RESTRICT"), nullable=True, index=True)

    author = relationship("Author", back_populates="books")

    __table_args__ = (
        Index("ix_books_title", "title"),
    )

    @property
    def author_ref(self) -> AuthorRef | None:
        """Id-only view of the author reference, available even when nothing is loaded."""
        return AuthorRef(self.author_id) if self.author_id is not None else None

    @author_ref.setter
    def author_ref(self, ref: AuthorRef | None) -> None:
        self.author_id = ref.id if ref is not None else None

    def to_document(self) -> dict:
        """Snapshot with the author nested, the way the search index keeps it."""
        doc = super().to_document()
        doc["author"] = self.author.to_document() if self.author is not None else None
        return doc

    @classmethod
    def from_document(cls, doc: dict):
        book = super().from_document(doc)
        author_doc = doc.get("author")
        if author_doc is not None:
            book.author = Author.from_document(author_doc)
            book.author_id = author_doc["id"]
        return book
