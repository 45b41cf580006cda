import re
import threading
import unittest
from unittest import mock

from pydantic import ValidationError

from nexgen.config import Settings
from nexgen.core.constants import INVENTORY_STORAGE_KEY
from nexgen.core.exceptions import EmptyOrderError, InsufficientStockError
from nexgen.core.stock_rules import StockStatus
from nexgen.schemas.sales_order import AttachmentMeta, SalesOrderStatus
from nexgen.services.fulfillment_service import OrderFulfillmentService, generate_order_id
from nexgen.store import MemoryKeyValueStore, SqlKeyValueStore


class OrderFulfillmentTest(unittest.TestCase):
    def setUp(self):
        self.store = MemoryKeyValueStore()
        self.store.write_json(INVENTORY_STORAGE_KEY, [])
        self.service = OrderFulfillmentService(self.store, settings=Settings())
        self.item_a = self.service.inventory.create(
            {"itemName": "Item A", "quantity": 5, "unitPrice": 10}
        )
        self.item_b = self.service.inventory.create(
            {"itemName": "Item B", "quantity": 40, "unitPrice": 5}
        )

    def _quantity(self, record_id):
        return self.service.inventory.get(record_id).quantity

    def test_rejects_order_exceeding_stock(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 6}])

        self.assertEqual(ctx.exception.item_name, "Item A")
        self.assertEqual(ctx.exception.requested, 6)
        self.assertEqual(ctx.exception.available, 5)
        self.assertIn("Item A", str(ctx.exception))
        self.assertEqual(self._quantity(self.item_a.id), 5)
        self.assertEqual(self.service.orders.list(), [])

    def test_successful_order_deducts_stock(self):
        earlier = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_b.id, "quantity": 1}])
        order = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 3}])

        record = self.service.inventory.get(self.item_a.id)
        self.assertEqual(record.quantity, 2)
        self.assertEqual(record.status, StockStatus.LOW_STOCK)
        self.assertEqual(order.total_amount, 30)
        self.assertEqual(order.status, SalesOrderStatus.APPROVED)
        self.assertEqual([o.id for o in self.service.orders.list()], [order.id, earlier.id])

    def test_total_amount_sums_lines(self):
        order = self.service.create_order(
            "u1",
            "Alice",
            [
                {"inventoryId": self.item_a.id, "quantity": 2},
                {"inventoryId": self.item_b.id, "quantity": 1},
            ],
        )
        self.assertEqual(order.total_amount, 25)
        self.assertEqual(order.total_quantity, 3)
        self.assertEqual([item.item_name for item in order.items], ["Item A", "Item B"])

    def test_one_bad_line_rejects_whole_batch(self):
        with self.assertRaises(InsufficientStockError):
            self.service.create_order(
                "u1",
                "Alice",
                [
                    {"inventoryId": self.item_b.id, "quantity": 10},
                    {"inventoryId": self.item_a.id, "quantity": 9},
                ],
            )
        self.assertEqual(self._quantity(self.item_b.id), 40)
        self.assertEqual(self._quantity(self.item_a.id), 5)

    def test_missing_inventory_record_is_insufficient_stock(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            self.service.create_order("u1", "Alice", [{"inventoryId": "gone", "quantity": 1}])
        self.assertEqual(ctx.exception.item_name, "gone")
        self.assertEqual(ctx.exception.available, 0)

    def test_duplicate_lines_are_validated_together(self):
        with self.assertRaises(InsufficientStockError):
            self.service.create_order(
                "u1",
                "Alice",
                [
                    {"inventoryId": self.item_a.id, "quantity": 3},
                    {"inventoryId": self.item_a.id, "quantity": 3},
                ],
            )
        self.assertEqual(self._quantity(self.item_a.id), 5)

    def test_empty_and_invalid_lines(self):
        with self.assertRaises(EmptyOrderError):
            self.service.create_order("u1", "Alice", [])
        with self.assertRaises(ValidationError):
            self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 0}])

    def test_order_snapshot_is_not_rederived(self):
        order = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 1}])
        self.service.inventory.update(self.item_a.id, {"unitPrice": 99, "itemName": "Renamed"})

        stored = self.service.orders.get(order.id)
        self.assertEqual(stored.items[0].unit_price, 10)
        self.assertEqual(stored.items[0].item_name, "Item A")
        self.assertEqual(stored.total_amount, 10)

    def test_order_id_and_attachment(self):
        order = self.service.create_order(
            "u1",
            "Alice",
            [{"inventoryId": self.item_b.id, "quantity": 2}],
            attachment=AttachmentMeta(document_name="po.pdf", document_type="application/pdf"),
        )
        self.assertRegex(order.id, r"^SO-[A-Z0-9]{6}$")
        self.assertEqual(order.user_id, "u1")
        self.assertEqual(order.username, "Alice")
        self.assertEqual(self.service.orders.get(order.id).document_name, "po.pdf")

    def test_attachment_mapping_is_accepted(self):
        order = self.service.create_order(
            "u1",
            "Alice",
            [{"inventoryId": self.item_b.id, "quantity": 1}],
            attachment={"documentName": "po.pdf"},
        )
        self.assertEqual(order.document_name, "po.pdf")
        self.assertIsNone(order.document_type)
        self.assertEqual(self._quantity(self.item_b.id), 39)

    def test_invalid_order_fields_leave_stock_untouched(self):
        with self.assertRaises(ValidationError):
            self.service.create_order(1, None, [{"inventoryId": self.item_a.id, "quantity": 3}])
        with self.assertRaises(ValidationError):
            self.service.create_order(
                "u1",
                "Alice",
                [{"inventoryId": self.item_a.id, "quantity": 3}],
                attachment={"documentType": "application/pdf"},
            )

        self.assertEqual(self._quantity(self.item_a.id), 5)
        self.assertEqual(self.service.orders.list(), [])

    def test_failed_order_write_rolls_back_stock(self):
        with mock.patch.object(self.service.orders, "prepend", side_effect=RuntimeError("disk full")):
            with self.assertRaises(RuntimeError):
                self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 3}])

        self.assertEqual(self._quantity(self.item_a.id), 5)
        self.assertEqual(self.service.orders.list(), [])

    def test_failed_order_write_rolls_back_stock_in_sql_store(self):
        store = SqlKeyValueStore.from_url("sqlite:///:memory:")
        self.addCleanup(store.close)
        store.write_json(INVENTORY_STORAGE_KEY, [])
        service = OrderFulfillmentService(store, settings=Settings())
        record = service.inventory.create({"itemName": "Item C", "quantity": 4, "unitPrice": 2})

        with mock.patch.object(service.orders, "prepend", side_effect=RuntimeError("disk full")):
            with self.assertRaises(RuntimeError):
                service.create_order("u1", "Alice", [{"inventoryId": record.id, "quantity": 4}])

        self.assertEqual(service.inventory.get(record.id).quantity, 4)
        self.assertEqual(service.orders.list(), [])

    def test_order_repository_only_prepends(self):
        orders = self.service.orders
        self.assertFalse(hasattr(orders, "create"))
        self.assertFalse(hasattr(orders, "update"))

        order = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_b.id, "quantity": 1}])
        self.assertEqual(orders.existing_ids(), {order.id})

    def test_generate_order_id_avoids_existing(self):
        order_id = generate_order_id({"SO-AAAAAA"})
        self.assertTrue(re.fullmatch(r"SO-[A-Z0-9]{6}", order_id))
        self.assertNotEqual(order_id, "SO-AAAAAA")

    def test_delete_does_not_restock_by_default(self):
        order = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 3}])

        self.service.delete_order(order.id)

        self.assertIsNone(self.service.orders.get(order.id))
        self.assertEqual(self._quantity(self.item_a.id), 2)

    def test_delete_restocks_when_enabled(self):
        service = OrderFulfillmentService(self.store, restock_on_delete=True)
        order = service.create_order(
            "u1",
            "Alice",
            [
                {"inventoryId": self.item_a.id, "quantity": 5},
                {"inventoryId": self.item_b.id, "quantity": 4},
            ],
        )
        service.inventory.delete(self.item_b.id)

        service.delete_order(order.id)

        record = service.inventory.get(self.item_a.id)
        self.assertEqual(record.quantity, 5)
        self.assertEqual(record.status, StockStatus.LOW_STOCK)
        self.assertIsNone(service.inventory.get(self.item_b.id))

    def test_delete_unknown_order_is_no_op(self):
        order = self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 1}])
        self.service.delete_order("SO-NOPE00")
        self.assertEqual([o.id for o in self.service.orders.list()], [order.id])

    def test_concurrent_orders_never_oversell(self):
        outcomes = []
        outcomes_lock = threading.Lock()

        def place_order():
            try:
                self.service.create_order("u1", "Alice", [{"inventoryId": self.item_a.id, "quantity": 1}])
                result = "ok"
            except InsufficientStockError:
                result = "rejected"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=place_order) for _ in range(12)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count("ok"), 5)
        self.assertEqual(outcomes.count("rejected"), 7)
        self.assertEqual(self._quantity(self.item_a.id), 0)
        self.assertEqual(len(self.service.orders.list()), 5)


if __name__ == "__main__":
    unittest.main()
