from datetime import datetime

from pycongestiontax.aggregator import charge_for_day, split_windows


def _day(*times: str) -> list[datetime]:
    return [datetime.fromisoformat(f"2013-02-04 {value}") for value in times]


def test_empty_day(rules) -> None:
    assert charge_for_day([], rules) == 0
    assert split_windows([], rules) == []


def test_single_passage(rules) -> None:
    assert charge_for_day(_day("06:45:00"), rules) == 13


def test_window_charges_highest_fee(rules) -> None:
    assert charge_for_day(_day("06:20:00", "06:45:00", "07:10:00"), rules) == 18


def test_window_boundary_is_inclusive(rules) -> None:
    windows = split_windows(_day("06:10:00", "07:10:00"), rules)

    assert len(windows) == 1
    assert windows[0].max_fee == 18


def test_elapsed_minutes_are_truncated(rules) -> None:
    windows = split_windows(_day("06:10:00", "07:10:59"), rules)

    assert len(windows) == 1


def test_window_measured_from_start_not_previous(rules) -> None:
    windows = split_windows(_day("06:00:00", "06:50:00", "07:40:00"), rules)

    assert [window.start for window in windows] == _day("06:00:00", "07:40:00")
    assert [window.passages for window in windows] == [
        tuple(_day("06:00:00", "06:50:00")),
        tuple(_day("07:40:00")),
    ]
    assert charge_for_day(_day("06:00:00", "06:50:00", "07:40:00"), rules) == 13 + 18


def test_zero_fee_passage_keeps_window(rules) -> None:
    windows = split_windows(_day("05:30:00", "06:20:00"), rules)

    assert len(windows) == 1
    assert windows[0].max_fee == 8


def test_merging_never_exceeds_highest_fee(rules) -> None:
    merged = charge_for_day(_day("06:20:00", "07:15:00"), rules)
    split = charge_for_day(_day("06:20:00", "07:25:00"), rules)

    assert merged == max(8, 18)
    assert split == 8 + 18


def test_daily_cap(make_rules) -> None:
    rules = make_rules(maxDailyTax=30)
    day = _day("06:00:00", "07:05:00", "18:45:00")

    assert sum(window.max_fee for window in split_windows(day, rules)) == 26
    assert charge_for_day(_day("06:00:00", "07:05:00"), rules) == 26
    assert charge_for_day(_day("06:00:00", "07:05:00", "07:59:00"), rules) == 26

    capped = make_rules(maxDailyTax=20)
    assert charge_for_day(_day("06:00:00", "07:05:00"), capped) == 20


def test_zero_cap(make_rules) -> None:
    assert charge_for_day(_day("07:30:00"), make_rules(maxDailyTax=0)) == 0


def test_custom_window_length(make_rules) -> None:
    rules = make_rules(singleChargeWindowMinutes=15)

    assert charge_for_day(_day("06:20:00", "06:35:00"), rules) == 13
    assert charge_for_day(_day("06:20:00", "06:36:00"), rules) == 8 + 13
