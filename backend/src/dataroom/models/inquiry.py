"""Inquiry SQLAlchemy model

An inquiry is a free-text document request or question left in the data
room. Rows are append-only: there is no update or delete path, and no link
back to any document.
"""

import uuid

from sqlalchemy import Column, DateTime, Index, Text, Uuid

from .base import Base


class Inquiry(Base):
    __tablename__ = "inquiries"
    __table_args__ = (
        Index("ix_inquiries_created_at", "created_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self):
        """Convert inquiry to dictionary representation"""
        return {
            "id": str(self.id),
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
