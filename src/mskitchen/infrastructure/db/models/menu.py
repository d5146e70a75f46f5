from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Time,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class MenuModel(Base):
    __tablename__ = "menus"
    __table_args__ = (UniqueConstraint("date", name="uq_menus_date"),)

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    menu_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    delivery_window_start: Mapped[time] = mapped_column(Time, nullable=False)
    delivery_window_end: Mapped[time] = mapped_column(Time, nullable=False)
    upi_phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    items: Mapped[list["MenuItemModel"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MenuItemModel.id",
    )


class MenuItemModel(Base):
    __tablename__ = "menu_items"
    __table_args__ = (
        CheckConstraint("quantity_available >= 0", name="ck_menu_items_quantity_available"),
        CheckConstraint("quantity_sold >= 0", name="ck_menu_items_quantity_sold"),
    )

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    menu_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    quantity_available: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    quantity_sold: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    menu: Mapped[MenuModel] = relationship(back_populates="items")
