from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from medishare.modules.matching.scorer import (
    score_match, urgency_score, expiry_score, quantity_ratio
)

NOW = datetime(2026, 1, 1, 0, 0, 0)


def make_pair(urgency="Critical", days=10, offered=200, requested=200):
    item = SimpleNamespace(id=1, medicine_id=7, expiry_date=(NOW + timedelta(days=days)).date())
    surplus = SimpleNamespace(id=1, inventory_item_id=1, quantity=offered)
    request = SimpleNamespace(id=1, medicine_id=7, quantity=requested, urgency=urgency)
    return surplus, request, item


def test_critical_request_ten_days_from_expiry_scores_97():
    surplus, request, item = make_pair()

    result = score_match(surplus, request, item, now=NOW)

    assert result.days_until_expiry == 10
    assert result.quantity_ratio == 1
    assert result.match_score == 97


def test_score_is_deterministic_for_fixed_now():
    surplus, request, item = make_pair(urgency="High", days=45, offered=300, requested=1000)

    first = score_match(surplus, request, item, now=NOW)
    second = score_match(surplus, request, item, now=NOW)

    assert first == second


@pytest.mark.parametrize("urgency, expected", [
    ("Critical", 100),
    ("High", 75),
    ("Medium", 50),
    ("Low", 25),
])
def test_urgency_table(urgency, expected):
    assert urgency_score(urgency) == expected


def test_quantity_ratio_is_capped_at_one():
    assert quantity_ratio(1500, 1000) == 1
    assert quantity_ratio(250, 1000) == 0.25


def test_far_expiry_contributes_nothing():
    assert expiry_score(90) == 0
    assert expiry_score(400) == 0


def test_partial_quantity_and_low_urgency():
    # 0.4*25 + 0.3*(100 - 45/90*100) + 0.3*50 = 10 + 15 + 15
    surplus, request, item = make_pair(urgency="Low", days=45, offered=500, requested=1000)

    assert score_match(surplus, request, item, now=NOW).match_score == 40


def test_days_until_expiry_rounds_partial_days_up():
    surplus, request, item = make_pair(days=10)

    result = score_match(surplus, request, item, now=NOW + timedelta(hours=6))

    assert result.days_until_expiry == 10


def test_expired_stock_is_not_clamped_above_100():
    surplus, request, item = make_pair(urgency="Low", days=-180)

    result = score_match(surplus, request, item, now=NOW)

    # expiry component is 300: 0.4*25 + 0.3*300 + 0.3*100
    assert result.days_until_expiry == -180
    assert expiry_score(-180) == 300
    assert result.match_score == 130


def test_accepts_datetime_expiry():
    surplus, request, item = make_pair()
    item.expiry_date = NOW + timedelta(days=10)

    assert score_match(surplus, request, item, now=NOW).days_until_expiry == 10
