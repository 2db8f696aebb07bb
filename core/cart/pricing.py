"""
Per-service price rules.

Each rule is deterministic in its inputs and returns a Decimal unit price.
Prices are in Naira.
"""
from decimal import Decimal

from core.services.money import add, multiply, round_money, to_decimal

# Game sessions: tournament/practice are flat, casual is tiered by duration
GAME_FLAT_PRICES = {
    "tournament": Decimal("500"),
    "practice": Decimal("500"),
}
GAME_CASUAL_TIERS = (
    (120, Decimal("3500")),  # 2 hours and up
    (60, Decimal("2000")),  # 1 hour and up
)
GAME_DEFAULT_PRICE = Decimal("1000")

PRINT_PRICE_PER_PAGE = Decimal("100")
PRINT_COLOR_MULTIPLIER = Decimal("1.5")

DELIVERY_BASE_FARES = {
    "small": Decimal("500"),
    "medium": Decimal("800"),
    "large": Decimal("1200"),
}
DELIVERY_RATE_PER_DISTANCE = Decimal("50")
VEHICLE_MULTIPLIERS = {
    "bike": Decimal("1"),
    "car": Decimal("1.5"),
    "van": Decimal("2"),
}

STREAMING_SUBSCRIPTION_PRICE = Decimal("2000")
STREAMING_SINGLE_PRICE = Decimal("500")

DOWNLOAD_PRICES = {
    "software": Decimal("1500"),
    "movie": Decimal("500"),
}
DOWNLOAD_DEFAULT_PRICE = Decimal("200")


def game_session_price(session_type: str, duration: int) -> Decimal:
    """Price a gaming session. Unknown session types fall back to the 30-minute casual rate."""
    if session_type in GAME_FLAT_PRICES:
        return GAME_FLAT_PRICES[session_type]
    if session_type == "casual":
        for min_duration, price in GAME_CASUAL_TIERS:
            if duration >= min_duration:
                return price
    return GAME_DEFAULT_PRICE


def print_job_price(num_pages: int, color: bool) -> Decimal:
    """Price a print job. Color results are not rounded here."""
    price = multiply(num_pages, PRINT_PRICE_PER_PAGE)
    if color:
        price = multiply(price, PRINT_COLOR_MULTIPLIER)
    return price


def delivery_price(package_size: str, estimated_distance, vehicle_type: str) -> Decimal:
    """
    Price a delivery run.

    (base fare + distance * 50) * vehicle multiplier, rounded to whole Naira.
    Large is the fallback fare and bike the fallback multiplier.
    """
    base_fare = DELIVERY_BASE_FARES.get(package_size, DELIVERY_BASE_FARES["large"])
    distance_fare = multiply(to_decimal(estimated_distance), DELIVERY_RATE_PER_DISTANCE)
    multiplier = VEHICLE_MULTIPLIERS.get(vehicle_type, VEHICLE_MULTIPLIERS["bike"])
    return round_money(multiply(add(base_fare, distance_fare), multiplier), to_int=True)


def streaming_price(access_type: str) -> Decimal:
    if access_type == "subscription":
        return STREAMING_SUBSCRIPTION_PRICE
    return STREAMING_SINGLE_PRICE


def download_price(file_type: str) -> Decimal:
    return DOWNLOAD_PRICES.get(file_type, DOWNLOAD_DEFAULT_PRICE)
