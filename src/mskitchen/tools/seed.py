from __future__ import annotations

import os
from datetime import date, time
from decimal import Decimal

from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from mskitchen.infrastructure.db.models.menu import MenuItemModel, MenuModel
from mskitchen.infrastructure.db.session import get_engine

DEMO_MENU_ID = "men_demo"

DEMO_ITEMS = [
    ("itm_demo_dal", "Dal", Decimal("50.00"), 10),
    ("itm_demo_rice", "Jeera Rice", Decimal("40.00"), 15),
    ("itm_demo_roti", "Roti", Decimal("10.00"), 40),
    ("itm_demo_sabzi", "Aloo Gobi", Decimal("60.00"), 8),
]


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    inspector = inspect(engine)
    required_tables = {"menus", "menu_items"}
    if not required_tables.issubset(set(inspector.get_table_names(schema="public"))):
        print("no schema yet")
        return

    currency = os.getenv("CURRENCY", "INR").upper()
    menu_date = date.today()

    with Session(engine) as session:
        session.execute(
            insert(MenuModel)
            .values(
                id=DEMO_MENU_ID,
                menu_date=menu_date,
                delivery_window_start=time(12, 0),
                delivery_window_end=time(14, 0),
                upi_phone_number="+919800000000",
            )
            .on_conflict_do_nothing()
        )

        if session.get(MenuModel, DEMO_MENU_ID) is None:
            session.rollback()
            print(f"another menu already exists for {menu_date.isoformat()}")
            return

        for item_id, name, price, quantity_available in DEMO_ITEMS:
            session.execute(
                insert(MenuItemModel)
                .values(
                    id=item_id,
                    menu_id=DEMO_MENU_ID,
                    name=name,
                    price=price,
                    currency=currency,
                    quantity_available=quantity_available,
                    quantity_sold=0,
                )
                .on_conflict_do_update(
                    index_elements=[MenuItemModel.id],
                    set_={
                        "name": name,
                        "price": price,
                        "currency": currency,
                    },
                )
            )

        session.commit()
        print("seed complete")


if __name__ == "__main__":
    main()
