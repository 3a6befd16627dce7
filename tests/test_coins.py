# tests/test_coins.py
from decimal import Decimal

import pytest

from vending.errors import InvalidInput
from vending.models import DENOMINATIONS, CoinBag, Denomination


def test_denominations_are_descending():
    assert [d.value for d in DENOMINATIONS] == [5.0, 3.0, 2.0, 1.0, 0.5, 0.25]


@pytest.mark.parametrize("value", [5, 5.0, "5.0", Decimal("5.00"), Denomination.FIVE])
def test_parse_accepts_numeric_forms(value):
    assert Denomination.parse(value) is Denomination.FIVE


@pytest.mark.parametrize("value", [True, False, 0.1, 4.0, "five", None, [5.0]])
def test_parse_rejects_unknown(value):
    with pytest.raises(InvalidInput):
        Denomination.parse(value)


def test_bag_compares_to_plain_dict():
    bag = CoinBag({2.0: 2, 0.25: 1})
    assert bag == {2.0: 2, 0.25: 1}
    assert bag[Denomination.TWO] == 2
    assert bag[0.5] == 0


def test_zero_counts_are_dropped():
    bag = CoinBag({1.0: 0})
    assert bag == {}
    bag[1.0] = 3
    bag[1.0] = 0
    assert bag == {}


def test_bag_rejects_bad_counts():
    with pytest.raises(InvalidInput):
        CoinBag({1.0: -1})
    with pytest.raises(InvalidInput):
        CoinBag({1.0: 1.5})
    with pytest.raises(InvalidInput):
        CoinBag({0.3: 1})


def test_mutators_validate():
    bag = CoinBag({1.0: 1})
    with pytest.raises(InvalidInput):
        bag.update({0.3: 4})
    with pytest.raises(InvalidInput):
        bag.update({1.0: -4})
    with pytest.raises(InvalidInput):
        bag.setdefault(0.3, 1)
    with pytest.raises(InvalidInput):
        bag |= {2.0: -1}
    with pytest.raises(InvalidInput):
        bag | {0.1: 1}
    # a failed update leaves the bag as it was
    with pytest.raises(InvalidInput):
        bag.update({5.0: 1, 0.3: 1})
    assert bag == {1.0: 1}


def test_mutators_normalise_keys():
    bag = CoinBag()
    bag.update({"2.0": 2, 0.5: 0})
    assert bag.setdefault(0.25) == 0
    bag |= {5: 1}
    assert bag == {2.0: 2, 5.0: 1}
    assert all(isinstance(d, Denomination) for d in bag)
    assert isinstance(bag | {1.0: 1}, CoinBag)


def test_total():
    assert CoinBag().total() == 0
    assert CoinBag({5.0: 1, 0.25: 3, 0.5: 1}).total() == Decimal("6.25")


def test_add_and_subtract():
    a = CoinBag({1.0: 2, 0.5: 1})
    b = CoinBag({1.0: 1, 5.0: 1})
    assert a + b == {1.0: 3, 0.5: 1, 5.0: 1}
    assert (a + b) - b == a
    # operands untouched
    assert a == {1.0: 2, 0.5: 1}


def test_subtract_below_zero_fails():
    with pytest.raises(InvalidInput):
        CoinBag({1.0: 1}) - CoinBag({1.0: 2})


def test_as_dict_is_descending():
    bag = CoinBag({0.25: 1, 5.0: 2, 1.0: 1})
    assert list(bag.as_dict().items()) == [("5.0", 2), ("1.0", 1), ("0.25", 1)]
