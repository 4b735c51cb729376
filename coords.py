from __future__ import annotations

def pixel_to_price(
    pixel_y: float,
    area_top: float,
    area_height: float,
    min_price: float,
    max_price: float,
) -> float:
    """
    Price under a vertical pointer position. The top edge of the display area
    maps to max_price and the bottom edge to min_price.
    """
    if area_height <= 0:
        raise ValueError("Display area height must be > 0")
    return max_price - ((pixel_y - area_top) / area_height) * (max_price - min_price)

def price_to_pixel(
    price: float,
    area_top: float,
    area_height: float,
    min_price: float,
    max_price: float,
) -> float:
    if area_height <= 0:
        raise ValueError("Display area height must be > 0")
    span = max_price - min_price
    if span == 0:
        return area_top
    return area_top + ((max_price - price) / span) * area_height
