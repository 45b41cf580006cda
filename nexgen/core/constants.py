INVENTORY_STORAGE_KEY = "nexgen_inventory_data"
USER_STORAGE_KEY = "nexgen_system_users"
ORDER_STORAGE_KEY = "nexgen_sales_orders"

LOW_STOCK_THRESHOLD = 10

ORDER_ID_PREFIX = "SO-"
ORDER_ID_LENGTH = 6

NEVER_LOGGED_IN = "-"

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
