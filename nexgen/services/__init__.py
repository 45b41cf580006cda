from nexgen.services.analytics_service import AnalyticsService
from nexgen.services.auth_service import AuthService
from nexgen.services.fulfillment_service import OrderFulfillmentService

__all__ = ["AnalyticsService", "AuthService", "OrderFulfillmentService"]
