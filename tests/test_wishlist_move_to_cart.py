def test_move_wishlist_item_to_cart_success(wishlist, cart, make_item):
    wishlist.add_to_wishlist(make_item(5, name="Movable Lamp", price=25.0))

    line = wishlist.move_to_cart(5, cart)

    assert line is not None
    assert line.id == 5
    assert line.quantity == 1
    assert line.price == 25.0
    # wishlist item should be gone
    assert not wishlist.is_in_wishlist(5)


def test_move_adds_to_existing_cart_line(wishlist, cart, make_item):
    cart.add_to_cart(make_item(5), 2)
    wishlist.add_to_wishlist(make_item(5))

    line = wishlist.move_to_cart(5, cart, quantity=3)

    assert line.quantity == 5
    assert len(cart) == 1


def test_move_nonexistent_wishlist_item_returns_none(wishlist, cart):
    assert wishlist.move_to_cart("nonexistent-id", cart) is None
    assert len(cart) == 0
