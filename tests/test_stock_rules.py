import unittest

from nexgen.core.stock_rules import StockStatus, is_low_stock, stock_status


class StockRulesTest(unittest.TestCase):
    def test_boundaries(self):
        cases = [
            (0, StockStatus.OUT_OF_STOCK),
            (1, StockStatus.LOW_STOCK),
            (10, StockStatus.LOW_STOCK),
            (11, StockStatus.IN_STOCK),
            (500, StockStatus.IN_STOCK),
        ]
        for quantity, expected in cases:
            with self.subTest(quantity=quantity):
                self.assertEqual(stock_status(quantity), expected)

    def test_labels_match_persisted_values(self):
        self.assertEqual(StockStatus.IN_STOCK.value, "In Stock")
        self.assertEqual(StockStatus.LOW_STOCK.value, "Low Stock")
        self.assertEqual(StockStatus.OUT_OF_STOCK.value, "Out of Stock")

    def test_low_stock_includes_out_of_stock(self):
        self.assertTrue(is_low_stock(StockStatus.LOW_STOCK))
        self.assertTrue(is_low_stock(StockStatus.OUT_OF_STOCK))
        self.assertFalse(is_low_stock(StockStatus.IN_STOCK))


if __name__ == "__main__":
    unittest.main()
