"""SQLAlchemy ORM model for the optional SQLite copy of the consolidated list."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, func
from sqlalchemy.orm import DeclarativeBase

from linkedin_reports.schema import CanonicalRecord


class Base(DeclarativeBase):
    pass


class PostReport(Base):
    __tablename__ = "post_reports"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    file_hash: str = Column(String(64), unique=True, nullable=False)
    source_file: str = Column(String, nullable=False)

    post_date: str | None = Column(String(10), nullable=True)
    post_publish_time: str | None = Column(String(5), nullable=True)
    impressions: float = Column(Float, default=0)
    members_reached: float = Column(Float, default=0)
    reactions: float = Column(Float, default=0)
    comments: float = Column(Float, default=0)
    reposts: float = Column(Float, default=0)

    # Company-size buckets from TOP DEMOGRAPHICS (share of viewers)
    employees_1_to_10: float = Column(Float, default=0)
    employees_51_to_200: float = Column(Float, default=0)
    employees_201_to_500: float = Column(Float, default=0)
    employees_501_to_1000: float = Column(Float, default=0)
    employees_1001_to_5000: float = Column(Float, default=0)
    employees_5001_to_10000: float = Column(Float, default=0)
    employees_10001_or_more: float = Column(Float, default=0)

    reactions_top_job_title: str | None = Column(String, nullable=True)
    reactions_top_location: str | None = Column(String, nullable=True)
    reactions_top_industry: str | None = Column(String, nullable=True)
    comments_top_job_title: str | None = Column(String, nullable=True)
    comments_top_location: str | None = Column(String, nullable=True)
    comments_top_industry: str | None = Column(String, nullable=True)
    post_url: str | None = Column(String, nullable=True)

    created_at: datetime = Column(DateTime, default=func.now())
    updated_at: datetime = Column(DateTime, default=func.now(), onupdate=func.now())

    def apply(self, record: CanonicalRecord) -> None:
        """Copy every canonical field from a record onto this row."""
        for key, value in record.to_dict().items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<PostReport id={self.id} date={self.post_date} source={self.source_file!r}>"
