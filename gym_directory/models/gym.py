from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_directory.models.base import Base


class Gym(Base):
    __tablename__ = "gyms"
    # ids are never handed out twice, even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    brand: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    equipment: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    size: Mapped[str] = mapped_column(String(16), nullable=False)
    has_shower: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    distance: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    created_at = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at = mapped_column(DateTime(timezone=True), nullable=False)

    reviews: Mapped[list[GymReview]] = relationship(
        back_populates="gym",
        cascade="all, delete-orphan",
        order_by="GymReview.id",
        lazy="selectin",
    )


class GymReview(Base):
    __tablename__ = "gym_reviews"
    __table_args__ = (UniqueConstraint("gym_id", "user_id", name="uq_gym_reviews_gym_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gym_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # No FK: reviews outlive the user that wrote them
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    created_at = mapped_column(DateTime(timezone=True), nullable=False)

    gym: Mapped[Gym] = relationship(back_populates="reviews")
