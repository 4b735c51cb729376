import pytest

from coords import pixel_to_price, price_to_pixel

def test_edges_map_to_visible_bounds():
    assert pixel_to_price(50, 50, 400, 90.0, 110.0) == 110.0
    assert pixel_to_price(450, 50, 400, 90.0, 110.0) == pytest.approx(90.0)

def test_mapping_is_affine():
    prices = [pixel_to_price(y, 0, 200, 90.0, 110.0) for y in (0, 50, 100, 150, 200)]
    steps = [a - b for a, b in zip(prices, prices[1:])]
    assert steps == pytest.approx([5.0] * 4)
    assert pixel_to_price(100, 0, 200, 90.0, 110.0) == pytest.approx(100.0)

def test_clicks_outside_area_extrapolate():
    assert pixel_to_price(-20, 0, 200, 90.0, 110.0) == pytest.approx(112.0)

def test_zero_height_is_rejected():
    with pytest.raises(ValueError):
        pixel_to_price(10, 0, 0, 90.0, 110.0)

def test_price_to_pixel_inverts_mapping():
    y = price_to_pixel(97.5, 10, 400, 90.0, 110.0)
    assert pixel_to_price(y, 10, 400, 90.0, 110.0) == pytest.approx(97.5)
    assert price_to_pixel(100.0, 10, 400, 100.0, 100.0) == 10
