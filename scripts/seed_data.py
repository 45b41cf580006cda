import argparse

from nexgen.config import get_settings
from nexgen.core.constants import INVENTORY_STORAGE_KEY, ORDER_STORAGE_KEY, USER_STORAGE_KEY
from nexgen.core.logging import setup_logging
from nexgen.repositories import InventoryRepository, SalesOrderRepository, UserRepository
from nexgen.store import build_store


def parse_args():
    parser = argparse.ArgumentParser(description="Seed the default inventory, users and orders.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    settings = get_settings()
    store = build_store(settings)

    if args.reset:
        with store.transaction():
            for key in (INVENTORY_STORAGE_KEY, USER_STORAGE_KEY, ORDER_STORAGE_KEY):
                store.remove(key)

    records = InventoryRepository(store).list()
    users = UserRepository(store, settings=settings).list()
    orders = SalesOrderRepository(store).list()
    print(
        "Store ready: {} inventory records, {} users, {} orders.".format(
            len(records), len(users), len(orders)
        )
    )


if __name__ == "__main__":
    main()
