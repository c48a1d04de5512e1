# orders/services/codes.py

"""
ORDER CODE GENERATOR

Short human-facing codes cashiers type to find an order.

- 8 symbols, each drawn independently and uniformly from A-Z0-9
- Not guaranteed unique; at retail volume collisions are negligible and are
  not retried
"""

from __future__ import annotations

import secrets
import string

ORDER_CODE_ALPHABET = string.ascii_uppercase + string.digits
ORDER_CODE_LENGTH = 8


def generate_order_code(length: int = ORDER_CODE_LENGTH) -> str:
    return "".join(secrets.choice(ORDER_CODE_ALPHABET) for _ in range(length))
