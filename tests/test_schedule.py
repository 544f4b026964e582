from datetime import datetime, time

import pytest

from pycongestiontax.schedule import fee_at


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (time(6, 0), 8),
        (time(6, 29), 8),
        (time(6, 29, 59), 0),
        (time(6, 30), 13),
        (time(7, 59), 18),
        (time(12, 0), 0),
        (time(18, 30), 0),
        (time(0, 0), 0),
        (time(5, 59), 0),
    ],
)
def test_fee_at(rules, moment: time, expected: int) -> None:
    assert fee_at(moment, rules) == expected


def test_fee_at_accepts_datetime(rules) -> None:
    assert fee_at(datetime(2013, 2, 4, 7, 30), rules) == 18


def test_first_matching_range_wins(make_rules) -> None:
    rules = make_rules(
        timeRanges=[
            {"from": "07:00", "to": "07:59", "amount": 5},
            {"from": "06:00", "to": "09:00", "amount": 20},
        ]
    )

    assert fee_at(time(7, 30), rules) == 5
    assert fee_at(time(8, 30), rules) == 20


def test_wrapping_range_declared_first_shadows_later_ranges(make_rules) -> None:
    rules = make_rules(
        timeRanges=[
            {"from": "22:00", "to": "06:30", "amount": 3},
            {"from": "06:00", "to": "06:59", "amount": 13},
        ]
    )

    assert fee_at(time(6, 15), rules) == 3
    assert fee_at(time(6, 45), rules) == 13
    assert fee_at(time(23, 0), rules) == 3


def test_no_ranges_is_free(make_rules) -> None:
    assert fee_at(time(7, 30), make_rules(timeRanges=[])) == 0
