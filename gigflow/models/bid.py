# gigflow/models/bid.py
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from gigflow.db.base import Base


class Bid(Base):
    __tablename__ = "bids"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    gig_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("gigs.id"), nullable=False
    )
    freelancer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    # denormalized at creation for display
    freelancer_name: Mapped[str] = mapped_column(String(128), nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=text("'Pending'")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Hired', 'Rejected')", name="ck_bids_status"
        ),
        Index("ix_bids_gig_status", "gig_id", "status"),
        Index("ix_bids_freelancer", "freelancer_id"),
        # at most one Hired bid per gig, enforced by the database as well
        Index(
            "uq_bids_one_hired_per_gig",
            "gig_id",
            unique=True,
            sqlite_where=text("status = 'Hired'"),
            postgresql_where=text("status = 'Hired'"),
        ),
    )
