from .codes import generate_order_code
from .lifecycle import OrderLifecycleService

__all__ = [
    "generate_order_code",
    "OrderLifecycleService",
]
