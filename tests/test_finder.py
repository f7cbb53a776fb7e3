from datetime import datetime, timedelta
from types import SimpleNamespace

from medishare.modules.matching.finder import find_matches, filter_for_clinic

NOW = datetime(2026, 1, 1)


def clinic(id):
    return SimpleNamespace(id=id, name=f"Clinic {id}", type="NGO")


def medicine(id):
    return SimpleNamespace(id=id, name=f"Medicine {id}")


def item(id, clinic_id, medicine_id, days=30):
    return SimpleNamespace(
        id=id, clinic_id=clinic_id, medicine_id=medicine_id,
        expiry_date=(NOW + timedelta(days=days)).date(), batch_number=f"B-{id}"
    )


def surplus(id, item, quantity=100, status="Available"):
    return SimpleNamespace(
        id=id, clinic_id=item.clinic_id, inventory_item_id=item.id,
        quantity=quantity, status=status
    )


def request(id, clinic_id, medicine_id, quantity=100, urgency="Medium", status="Open"):
    return SimpleNamespace(
        id=id, clinic_id=clinic_id, medicine_id=medicine_id,
        quantity=quantity, urgency=urgency, status=status
    )


CLINICS = [clinic(1), clinic(2), clinic(3)]
MEDICINES = [medicine(10), medicine(20)]


def test_pairs_only_same_medicine():
    amox = item(100, 1, 10)
    para = item(101, 1, 20)
    posts = [surplus(1, amox), surplus(2, para)]
    requests = [request(1, 2, 10), request(2, 3, 20), request(3, 3, 99)]

    matches = find_matches(posts, requests, [amox, para], MEDICINES, CLINICS, now=NOW)

    pairs = {(m.surplus.id, m.request.id) for m in matches}
    assert pairs == {(1, 1), (2, 2)}
    for m in matches:
        assert m.inventory_item.medicine_id == m.request.medicine_id
        assert m.medicine.id == m.request.medicine_id


def test_only_available_surplus_and_open_requests():
    amox = item(100, 1, 10)
    posts = [
        surplus(1, amox, status="Available"),
        surplus(2, amox, status="Reserved"),
        surplus(3, amox, status="Cancelled"),
    ]
    requests = [
        request(1, 2, 10, status="Open"),
        request(2, 2, 10, status="Matched"),
        request(3, 2, 10, status="Fulfilled"),
    ]

    matches = find_matches(posts, requests, [amox], MEDICINES, CLINICS, now=NOW)

    assert len(matches) == 1
    assert matches[0].surplus.status == "Available"
    assert matches[0].request.status == "Open"


def test_unresolved_references_are_skipped():
    orphan_item = item(100, 1, 10)
    unknown_medicine_item = item(101, 1, 77)
    known = item(102, 1, 10)
    posts = [
        surplus(1, SimpleNamespace(id=999, clinic_id=1)),
        surplus(2, unknown_medicine_item),
        surplus(3, known),
    ]
    requests = [request(1, 2, 10), request(2, 42, 10)]

    matches = find_matches(posts, requests, [orphan_item, unknown_medicine_item, known], MEDICINES, CLINICS, now=NOW)

    assert [(m.surplus.id, m.request.id) for m in matches] == [(3, 1)]


def test_surplus_from_unknown_clinic_is_skipped():
    amox = item(100, 8, 10)
    matches = find_matches([surplus(1, amox)], [request(1, 2, 10)], [amox], MEDICINES, CLINICS, now=NOW)

    assert matches == []


def test_sorted_by_score_descending():
    amox = item(100, 1, 10, days=60)
    posts = [surplus(1, amox, quantity=100)]
    requests = [
        request(1, 2, 10, urgency="Low"),
        request(2, 3, 10, urgency="Critical"),
        request(3, 2, 10, urgency="Medium"),
    ]

    matches = find_matches(posts, requests, [amox], MEDICINES, CLINICS, now=NOW)

    scores = [m.match_score for m in matches]
    assert scores == sorted(scores, reverse=True)
    assert [m.request.id for m in matches] == [2, 3, 1]


def test_ties_keep_encounter_order_and_repeat():
    amox = item(100, 1, 10)
    posts = [surplus(5, amox), surplus(3, amox), surplus(9, amox)]
    requests = [request(1, 2, 10)]

    first = find_matches(posts, requests, [amox], MEDICINES, CLINICS, now=NOW)
    second = find_matches(posts, requests, [amox], MEDICINES, CLINICS, now=NOW)

    assert len({m.match_score for m in first}) == 1
    assert [m.surplus.id for m in first] == [5, 3, 9]
    assert [(m.surplus.id, m.request.id) for m in first] == [(m.surplus.id, m.request.id) for m in second]


def test_match_carries_clinics_and_metrics():
    amox = item(100, 1, 10, days=10)
    matches = find_matches(
        [surplus(1, amox, quantity=200)],
        [request(1, 2, 10, quantity=200, urgency="Critical")],
        [amox], MEDICINES, CLINICS, now=NOW
    )

    match = matches[0]
    assert match.from_clinic.id == 1
    assert match.to_clinic.id == 2
    assert match.days_until_expiry == 10
    assert match.match_score == 97


def test_filter_for_clinic_keeps_giving_and_receiving_sides():
    amox = item(100, 1, 10)
    para = item(101, 3, 20)
    posts = [surplus(1, amox), surplus(2, para)]
    requests = [request(1, 2, 10), request(2, 2, 20)]

    matches = find_matches(posts, requests, [amox, para], MEDICINES, CLINICS, now=NOW)

    assert {m.surplus.id for m in filter_for_clinic(matches, 1)} == {1}
    assert {m.surplus.id for m in filter_for_clinic(matches, 3)} == {2}
    assert len(filter_for_clinic(matches, 2)) == 2


def test_empty_inputs():
    assert find_matches([], [], [], [], [], now=NOW) == []
