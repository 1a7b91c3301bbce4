from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from joblit.database import Base


class Job(Base):
    __tablename__ = "jobs"

    __table_args__ = (
        Index("idx_job_employer_id", "employer_id"),
        Index("idx_job_posted_at", "posted_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)

    # 0 means the employer did not give a salary
    salary: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # Copied from the employer when the job is posted, not kept in sync afterwards
    company_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    posted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
