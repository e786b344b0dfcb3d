from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, MetaData, String, Text
from sqlalchemy.orm import DeclarativeBase

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    # avoid constraint_name token to allow unnamed CheckConstraint
    "ck": "ck_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


def utc_now() -> datetime:
    return datetime.now(UTC)


class SymptomMaster(Base):
    """One symptom description attached to a body part or full-body symptom group."""

    __tablename__ = "symptom_master"

    id = Column(Integer, primary_key=True)
    body_part = Column(String, nullable=False)
    symptoms = Column(Text, nullable=False, default="")
    short_summary = Column(Text)
    probable_diagnosis = Column(Text)
    basic_investigations = Column(Text)
    common_treatments = Column(Text)
    prescription_yn = Column(String(1), nullable=False, default="N")
    created_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        CheckConstraint("prescription_yn in ('Y','N')", name="ck_symptom_master_prescription_yn"),
        Index("ix_symptom_master_body_part", "body_part"),
    )
