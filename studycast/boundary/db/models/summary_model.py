"""
Summary ORM model.

One row per summarization run; several rows per document are allowed.

Dependencies: sqlalchemy, studycast.boundary.db.base
System role: Summary persistence
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from studycast.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class SummaryModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Summary ORM model.

    Attributes:
        id: UUID primary key
        document_id: Summarized document
        text: Summary text
        narration_ref: Audio storage reference, null until narration succeeds
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "summaries"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    narration_ref: Mapped[str | None] = mapped_column(String(1024), nullable=True)
