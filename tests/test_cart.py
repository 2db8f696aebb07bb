"""
Tests for the unified cart
"""

from decimal import Decimal

import pytest

from core.cart import CartItem, MemoryCartStorage, ServiceType, UnifiedCart
from core.cart.storage import CartStorage


def _rice(qty=1, details=None):
    return CartItem(
        id="menu-1",
        service_type=ServiceType.RESTAURANT,
        name="Jollof Rice",
        price=1500,
        qty=qty,
        details=details if details is not None else {"category": "Mains"},
    )


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_price_is_decimal(self):
        item = _rice()

        assert isinstance(item.price, Decimal)
        assert item.price == Decimal("1500")

    def test_service_type_from_string(self):
        item = CartItem(id="x", service_type="game", name="Session", price=500)

        assert item.service_type is ServiceType.GAME

    def test_line_total(self):
        assert _rice(qty=3).line_total == Decimal("4500")

    def test_merge_key_ignores_details_key_order(self):
        a = _rice(details={"category": "Mains", "preparationTime": 15})
        b = _rice(details={"preparationTime": 15, "category": "Mains"})

        assert a.merge_key == b.merge_key

    def test_merge_key_distinguishes_none_and_empty_details(self):
        a = CartItem(id="x", service_type="ecommerce", name="Cap", price=100, details=None)
        b = CartItem(id="x", service_type="ecommerce", name="Cap", price=100, details={})

        assert a.merge_key != b.merge_key

    def test_to_dict_uses_client_keys(self):
        data = _rice(qty=2).to_dict()

        assert data == {
            "id": "menu-1",
            "serviceType": "restaurant",
            "name": "Jollof Rice",
            "price": "1500",
            "qty": 2,
            "details": {"category": "Mains"},
        }

    def test_from_dict(self):
        item = CartItem.from_dict({
            "id": "dl-1",
            "serviceType": "download",
            "name": "Ubuntu ISO",
            "price": 1500,
            "qty": 1,
            "imageUrl": "https://cdn.example/ubuntu.png",
        })

        assert item.service_type is ServiceType.DOWNLOAD
        assert item.price == 1500
        assert item.details is None
        assert item.image_url == "https://cdn.example/ubuntu.png"


class TestAddItem:
    """Insert / merge semantics."""

    def test_add_new_item(self, cart):
        cart.add_item(_rice(qty=2))

        assert len(cart.items) == 1
        assert cart.items[0].qty == 2

    def test_unset_qty_defaults_to_one(self, cart):
        cart.add_item(_rice(qty=None))
        cart.add_item(CartItem(id="p", service_type="ecommerce", name="Cap", price=100, qty=0))

        assert [i.qty for i in cart.items] == [1, 1]

    def test_same_merge_key_sums_quantities(self, cart):
        for qty in (1, 2, 4):
            cart.add_item(_rice(qty=qty))

        assert len(cart.items) == 1
        assert cart.items[0].qty == 7

    def test_different_details_are_separate_lines(self, cart):
        cart.add_item(_rice(details={"category": "Mains"}))
        cart.add_item(_rice(details={"category": "Mains", "specialInstructions": "no pepper"}))

        assert len(cart.items) == 2

    def test_same_id_different_service_is_separate(self, cart):
        cart.add_item(CartItem(id="1", service_type="restaurant", name="Rice", price=100, details={}))
        cart.add_item(CartItem(id="1", service_type="ecommerce", name="Rice bag", price=100, details={}))

        assert len(cart.items) == 2

    def test_insertion_order_preserved(self, cart):
        cart.add_item(CartItem(id="a", service_type="print", name="A", price=1))
        cart.add_item(CartItem(id="b", service_type="game", name="B", price=1))
        cart.add_item(CartItem(id="c", service_type="print", name="C", price=1))

        assert [i.id for i in cart.items] == ["a", "b", "c"]
        assert [i.id for i in cart.get_service_items("print")] == ["a", "c"]


class TestServiceHelpers:
    """Per-service add helpers derive price and details."""

    def test_restaurant_defaults_category_to_name(self, cart):
        item = cart.add_restaurant_item("menu-1", "Jollof Rice", 1500, quantity=2)

        assert item.price == 1500
        assert item.qty == 2
        assert item.details == {"category": "Jollof Rice"}

    def test_restaurant_keeps_given_details(self, cart):
        item = cart.add_restaurant_item(
            "menu-1", "Jollof Rice", 1500,
            details={"category": "Mains", "specialInstructions": "extra plantain"},
        )

        assert item.details == {"category": "Mains", "specialInstructions": "extra plantain"}

    @pytest.mark.parametrize(
        "session_type,duration,expected",
        [
            ("casual", 150, 3500),
            ("casual", 120, 3500),
            ("casual", 90, 2000),
            ("casual", 60, 2000),
            ("casual", 30, 1000),
            ("tournament", 240, 500),
            ("practice", 30, 500),
        ],
    )
    def test_game_session_price(self, cart, session_type, duration, expected):
        item = cart.add_game_session("game-1", "FC26", duration, session_type)

        assert item.price == expected
        assert item.qty == 1

    def test_game_session_details(self, cart):
        item = cart.add_game_session("game-1", "FC26", 90, "casual")

        assert item.details == {
            "sessionType": "casual",
            "duration": 90,
            "opponentType": "random",
            "gameVersion": "FC26",
        }

    def test_print_job_black_and_white(self, cart, print_details):
        item = cart.add_print_job("print-job", "Thesis", print_details)

        assert item.price == 1000
        assert item.details["fileName"] == "thesis.pdf"

    def test_print_job_color(self, cart, print_details):
        print_details["printOptions"]["color"] = True
        item = cart.add_print_job("print-job", "Thesis", print_details)

        assert item.price == 1500

    def test_product_price_passthrough(self, cart):
        item = cart.add_product("sku-9", "Headset", 18500, {"category": "Audio", "brand": "Oraimo", "stock": 4})

        assert item.service_type is ServiceType.ECOMMERCE
        assert item.price == 18500
        assert item.details == {"category": "Audio", "brand": "Oraimo", "stock": 4}

    def test_delivery_price(self, cart, delivery_details):
        item = cart.add_delivery("ride-1", "Lekki drop-off", delivery_details)

        assert item.price == 1950  # round((800 + 500) * 1.5)

    def test_streaming_price(self, cart):
        single = cart.add_streaming_content(
            "show-1", "Match day", {"type": "live_stream", "title": "Match day", "accessType": "single"}
        )
        sub = cart.add_streaming_content(
            "show-2", "Monthly", {"type": "live_tv", "title": "Monthly", "accessType": "subscription"}
        )

        assert single.price == 500
        assert sub.price == 2000

    @pytest.mark.parametrize("file_type,expected", [("software", 1500), ("movie", 500), ("pdf", 200)])
    def test_download_price(self, cart, file_type, expected):
        item = cart.add_download("dl-1", "File", {"fileType": file_type, "fileSize": 1024})

        assert item.price == expected

    def test_invalid_details_raise_value_error(self, cart):
        with pytest.raises(ValueError):
            cart.add_delivery("ride-1", "Ride", {"packageSize": "huge"})

        assert cart.is_empty()

    def test_details_stored_as_sent(self, cart):
        sent = {"fileName": "a.pdf", "numPages": 3}

        item = cart.add_print_job("p1", "Notes", sent)

        assert item.details == {"fileName": "a.pdf", "numPages": 3}

    def test_details_copied_from_caller(self, cart):
        sent = {"fileName": "a.pdf", "numPages": 3, "printOptions": {"color": True}}
        cart.add_print_job("p1", "Notes", sent)

        sent["printOptions"]["color"] = False

        assert cart.items[0].details["printOptions"] == {"color": True}

    def test_details_model_stores_only_set_fields(self, cart):
        from core.cart.details import DownloadDetails

        item = cart.add_download("dl-1", "Installer", DownloadDetails(fileType="software"))

        assert item.details == {"fileType": "software"}
        assert item.price == 1500

    def test_update_with_sent_details_hits_line(self, cart):
        sent = {"fileName": "a.pdf", "numPages": 3}
        cart.add_print_job("p1", "Notes", sent)
        cart.add_print_job("p1", "Slides", {"fileName": "b.pdf", "numPages": 1})

        updated = cart.update_quantity("p1", "print", 5, details=sent)

        assert updated is not None
        assert [i.qty for i in cart.items] == [5, 1]

    def test_remove_with_sent_details_hits_line(self, cart):
        sent = {"pickupAddress": "A", "deliveryAddress": "B", "packageSize": "small",
                "vehicleType": "bike", "estimatedDistance": 2}
        cart.add_delivery("ride-1", "Ride", sent)
        cart.add_delivery("ride-1", "Ride back", {**sent, "pickupAddress": "B", "deliveryAddress": "A"})

        assert cart.remove_item("ride-1", "logistics", details=sent) == 1
        assert cart.items[0].details["pickupAddress"] == "B"


class TestRemoveAndUpdate:
    """remove_item / update_quantity / clear_cart."""

    def test_remove_item_removes_all_variants(self, cart, print_details):
        cart.add_print_job("print-job", "Thesis", print_details)
        cart.add_print_job("print-job", "Slides", {**print_details, "fileName": "slides.pdf"})
        cart.add_restaurant_item("menu-1", "Jollof Rice", 1500)

        removed = cart.remove_item("print-job", ServiceType.PRINT)

        assert removed == 2
        assert [i.id for i in cart.items] == ["menu-1"]

    def test_remove_item_with_details_removes_one_variant(self, cart, print_details):
        first = cart.add_print_job("print-job", "Thesis", print_details)
        cart.add_print_job("print-job", "Slides", {**print_details, "fileName": "slides.pdf"})

        removed = cart.remove_item("print-job", "print", details=first.details)

        assert removed == 1
        assert cart.items[0].details["fileName"] == "slides.pdf"

    def test_update_quantity_sets_first_match(self, cart):
        cart.add_item(_rice(qty=1, details={"category": "Mains"}))
        cart.add_item(_rice(qty=1, details={"category": "Sides"}))

        cart.update_quantity("menu-1", "restaurant", 5)

        assert [i.qty for i in cart.items] == [5, 1]

    def test_update_quantity_zero_removes_exactly_one(self, cart):
        cart.add_item(_rice(details={"category": "Mains"}))
        cart.add_item(_rice(details={"category": "Sides"}))
        cart.add_game_session("game-1", "FC26", 60, "casual")

        result = cart.update_quantity("menu-1", ServiceType.RESTAURANT, 0)

        assert result is None
        assert len(cart.items) == 2
        assert cart.items[0].details == {"category": "Sides"}
        assert cart.items[1].id == "game-1"

    def test_update_quantity_negative_removes(self, cart):
        cart.add_item(_rice())

        cart.update_quantity("menu-1", "restaurant", -3)

        assert cart.is_empty()

    def test_update_quantity_with_details_targets_variant(self, cart):
        cart.add_item(_rice(details={"category": "Mains"}))
        cart.add_item(_rice(details={"category": "Sides"}))

        cart.update_quantity("menu-1", "restaurant", 4, details={"category": "Sides"})

        assert [i.qty for i in cart.items] == [1, 4]

    def test_update_quantity_no_match_is_noop(self, cart):
        cart.add_item(_rice())

        assert cart.update_quantity("missing", "restaurant", 3) is None
        assert cart.items[0].qty == 1

    def test_clear_cart(self, cart, delivery_details):
        cart.add_item(_rice(qty=2))
        cart.add_delivery("ride-1", "Ride", delivery_details)

        cart.clear_cart()

        assert cart.is_empty()
        assert not cart.has_items()
        assert cart.get_total_amount() == 0
        assert cart.get_total_items() == 0


class TestAggregates:
    """Totals and counts."""

    def test_totals(self, cart, print_details):
        cart.add_item(_rice(qty=2))  # 3000
        cart.add_game_session("game-1", "FC26", 150, "casual")  # 3500
        cart.add_print_job("print-job", "Thesis", print_details)  # 1000

        assert cart.get_total_amount() == 7500
        assert cart.get_total_amount() == sum(i.price * i.qty for i in cart.items)
        assert cart.get_total_items() == 4
        assert cart.get_service_total("restaurant") == 3000
        assert cart.get_item_count(ServiceType.RESTAURANT) == 2
        assert cart.get_service_total("streaming") == 0
        assert cart.get_item_count("streaming") == 0

    def test_has_items_and_is_empty(self, cart):
        assert cart.is_empty()
        assert not cart.has_items()

        cart.add_item(_rice())

        assert cart.has_items()
        assert not cart.is_empty()

    def test_group_by_service_first_appearance_order(self, cart):
        cart.add_game_session("game-1", "FC26", 60, "casual")
        cart.add_item(_rice())
        cart.add_game_session("game-2", "FC26", 30, "casual")

        groups = cart.group_by_service()

        assert list(groups) == [ServiceType.GAME, ServiceType.RESTAURANT]
        assert [i.id for i in groups[ServiceType.GAME]] == ["game-1", "game-2"]

    def test_items_is_a_snapshot(self, cart):
        cart.add_item(_rice())
        snapshot = cart.items
        snapshot.clear()

        assert len(cart.items) == 1


class TestPersistence:
    """Write-through persistence and reload."""

    def test_reload_restores_identical_items(self, slots, print_details, delivery_details):
        cart = UnifiedCart(MemoryCartStorage(slots=slots))
        cart.add_item(_rice(qty=3))
        print_details["printOptions"]["color"] = True
        cart.add_print_job("print-job", "Thesis", print_details)
        cart.add_delivery("ride-1", "Ride", delivery_details)

        reloaded = UnifiedCart(MemoryCartStorage(slots=slots))

        assert reloaded.items == cart.items
        assert reloaded.get_total_amount() == cart.get_total_amount()

    def test_every_mutation_is_saved(self, slots):
        cart = UnifiedCart(MemoryCartStorage(slots=slots))
        cart.add_item(_rice())
        cart.update_quantity("menu-1", "restaurant", 4)

        assert UnifiedCart(MemoryCartStorage(slots=slots)).items[0].qty == 4

        cart.clear_cart()

        assert UnifiedCart(MemoryCartStorage(slots=slots)).is_empty()

    def test_corrupted_slot_loads_empty(self):
        cart = UnifiedCart(MemoryCartStorage(slots={"unifiedCart": "{not json"}))

        assert cart.is_empty()

    def test_failed_save_does_not_break_mutation(self):
        class BrokenStorage(CartStorage):
            def load(self):
                return []

            def save(self, items):
                raise ConnectionError("storage offline")

        cart = UnifiedCart(BrokenStorage())
        cart.add_item(_rice(qty=2))

        assert cart.get_total_items() == 2

    def test_to_list(self, cart):
        cart.add_item(_rice(qty=2))

        assert cart.to_list() == [{
            "id": "menu-1",
            "serviceType": "restaurant",
            "name": "Jollof Rice",
            "price": "1500",
            "qty": 2,
            "details": {"category": "Mains"},
        }]
