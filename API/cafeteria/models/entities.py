from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from cafeteria.models.base import Base


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    enrolled_from: Mapped[date] = mapped_column(Date, nullable=False)
    enrolled_to: Mapped[date] = mapped_column(Date, nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Admin(Base):
    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(128), primary_key=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)


class Enlistment(Base):
    __tablename__ = "enlistments"
    __table_args__ = (
        UniqueConstraint("student_id", "year", "week", name="uq_enlistments_student_week"),
        Index("idx_enlistments_year_week", "year", "week"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    monday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tuesday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    wednesday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    thursday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    friday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Menu(Base):
    __tablename__ = "menus"
    __table_args__ = (UniqueConstraint("year", "week", name="uq_menus_year_week"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    monday: Mapped[str] = mapped_column(String(255), nullable=False)
    tuesday: Mapped[str] = mapped_column(String(255), nullable=False)
    wednesday: Mapped[str] = mapped_column(String(255), nullable=False)
    thursday: Mapped[str] = mapped_column(String(255), nullable=False)
    friday: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
