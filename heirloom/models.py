from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from heirloom.db import Base


class FamilyTreeRecord(Base):
    __tablename__ = "family_trees"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    home_person_id: Mapped[str | None] = mapped_column(String(96))
    member_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    profiles: Mapped[list["ProfileRecord"]] = relationship(
        "ProfileRecord",
        back_populates="tree",
        cascade="all, delete-orphan",
    )


class ProfileRecord(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(96), primary_key=True)
    tree_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("family_trees.id"))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="Unknown")
    gender: Mapped[str] = mapped_column(String(16), nullable=False, default="unknown")
    birth_year: Mapped[str] = mapped_column(String(16), nullable=False, default="Unknown")
    death_year: Mapped[str | None] = mapped_column(String(16))
    image_url: Mapped[str] = mapped_column(String(2048), nullable=False, default="")
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_memorial: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    memories_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    sources_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    parent_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    spouse_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    child_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    tree: Mapped["FamilyTreeRecord"] = relationship("FamilyTreeRecord", back_populates="profiles")
    events: Mapped[list["LifeEventRecord"]] = relationship(
        "LifeEventRecord",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="LifeEventRecord.position",
    )


class LifeEventRecord(Base):
    __tablename__ = "life_events"

    id: Mapped[str] = mapped_column(String(96), primary_key=True)
    profile_id: Mapped[str] = mapped_column(String(96), ForeignKey("profiles.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    place: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    spouse_name: Mapped[str | None] = mapped_column(String(255))
    media_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    profile: Mapped["ProfileRecord"] = relationship("ProfileRecord", back_populates="events")
