"""
Repository Pattern for Database Operations

- OrderRepository: Orders, payment workflow
"""
from .order_repo import OrderRepository

__all__ = [
    "OrderRepository",
]
