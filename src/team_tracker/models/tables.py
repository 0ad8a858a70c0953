"""SQLAlchemy tables for locations, teams and their visit history."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .domain import utc_now


class Base(DeclarativeBase):
    pass


class Location(Base):
    """A placemark imported at startup. Coordinates never change afterwards."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    # Cached copy of "any visit was preached"; only ever flipped to True.
    is_preached: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    leader: Mapped[str] = mapped_column(String, nullable=False)


class LocationVisit(Base):
    """Append-only visit events; rows are never updated or deleted."""

    __tablename__ = "location_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False, index=True)
    visit_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now, index=True)
    is_preached: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")


class PlannedVisit(Base):
    __tablename__ = "planned_visits"
    __table_args__ = (UniqueConstraint("location_id", "planned_date", name="uq_planned_visits_location_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False, index=True)
    planned_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="planned")  # planned|completed|cancelled


class TeamAssignment(Base):
    __tablename__ = "team_assignments"
    __table_args__ = (UniqueConstraint("team_id", "location_id", name="uq_team_assignments_team_location"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False, index=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    completed_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
