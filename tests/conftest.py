"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock, Mock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("TELEGRAM_TOKEN", "test_token")
os.environ.setdefault("TELEGRAM_ADMIN_CHAT_ID", "1001")
os.environ.setdefault("TELEGRAM_KITCHEN_CHAT_ID", "1002")
os.environ.setdefault("CART_STORAGE", "memory")


@pytest.fixture
def slots():
    """Backing dict for a MemoryCartStorage, shared between cart instances"""
    return {}


@pytest.fixture
def cart(slots):
    """Empty cart persisted to the `slots` fixture"""
    from core.cart import MemoryCartStorage, UnifiedCart

    return UnifiedCart(MemoryCartStorage(slots=slots))


@pytest.fixture
def print_details():
    """Print job details as the client sends them"""
    return {
        "fileName": "thesis.pdf",
        "fileSize": 204800,
        "numPages": 10,
        "printOptions": {"color": False, "duplex": True, "binding": "staple"},
    }


@pytest.fixture
def delivery_details():
    """Delivery details as the client sends them"""
    return {
        "pickupAddress": "12 Allen Avenue, Ikeja",
        "deliveryAddress": "5 Admiralty Way, Lekki",
        "packageSize": "medium",
        "vehicleType": "car",
        "estimatedDistance": 10,
    }


@pytest.fixture
def sample_order_data():
    """Order row as returned by Supabase"""
    return {
        "id": "order-123",
        "order_id_display": "DH-12345678",
        "user_id": "user-123",
        "username": "chidi",
        "items": [
            {
                "menu_item_id": "menu-1",
                "name": "Jollof Rice",
                "price": 1500.0,
                "qty": 2,
                "service_type": "restaurant",
                "details": {"category": "Mains"},
            },
            {
                "menu_item_id": "game-1",
                "name": "FC26 Session",
                "price": 2000.0,
                "qty": 1,
                "service_type": "game",
                "details": {"sessionType": "casual", "duration": 90},
            },
        ],
        "total_amount": 5000.0,
        "status": "pending",
        "payment_status": "pending",
        "payment_method": "bank_transfer",
        "payment_reference": None,
        "order_date": "2025-01-01T12:30:00+00:00",
    }


@pytest.fixture
def sample_order(sample_order_data):
    from core.services.models import Order

    return Order(**sample_order_data)


@pytest.fixture
def mock_order_repo(sample_order):
    """OrderRepository double returning the sample order"""
    repo = Mock()
    repo.create = AsyncMock(return_value=sample_order)
    repo.get_by_id = AsyncMock(return_value=sample_order)
    repo.update = AsyncMock(return_value=sample_order)
    return repo


@pytest.fixture
def mock_notifications():
    """NotificationService double"""
    service = Mock()
    service.notify_new_order = AsyncMock(return_value=True)
    service.notify_payment = AsyncMock(return_value=True)
    service.notify_kitchen = AsyncMock(return_value=True)
    service.notify_status_change = AsyncMock(return_value=True)
    return service
