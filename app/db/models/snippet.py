from sqlalchemy import Boolean, Column, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import BaseModel


class Snippet(BaseModel):
    __tablename__ = "snippets"

    title = Column(String(255), nullable=False)
    code = Column(Text, nullable=False, default="")
    language = Column(String(50), nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="snippets")
    shares = relationship("SnippetShare", back_populates="snippet", cascade="all, delete-orphan")


class SnippetShare(BaseModel):
    __tablename__ = "snippet_shares"
    __table_args__ = (
        UniqueConstraint("snippet_id", "user_id", name="uq_snippet_shares_snippet_user"),
    )

    snippet_id = Column(Uuid(as_uuid=True), ForeignKey("snippets.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    snippet = relationship("Snippet", back_populates="shares")
    user = relationship("User", back_populates="shares")
