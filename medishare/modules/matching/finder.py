# medishare/modules/matching/finder.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

from medishare.shared.schemas.enums import SurplusStatusEnum, RequestStatusEnum
from .scorer import score_match


@dataclass(frozen=True)
class Match:
    """Scored pairing of one available surplus posting and one open request"""
    surplus: Any
    request: Any
    inventory_item: Any
    medicine: Any
    from_clinic: Any
    to_clinic: Any
    match_score: int
    days_until_expiry: int
    quantity_ratio: float


def _index(entities: Iterable[Any]) -> dict:
    # First occurrence wins when ids repeat
    indexed = {}
    for entity in entities:
        indexed.setdefault(entity.id, entity)
    return indexed


def find_matches(
    surplus_posts: Iterable[Any],
    requests: Iterable[Any],
    inventory: Iterable[Any],
    medicines: Iterable[Any],
    clinics: Iterable[Any],
    now: Optional[datetime] = None
) -> List[Match]:
    """
    Pair every Available surplus posting with every Open request for the same
    medicine and rank the pairs by score, highest first.

    Postings or requests whose inventory item, medicine or clinic cannot be
    resolved are skipped. Equal scores keep the order in which the pairs were
    found (surplus order, then request order).
    """
    now = now or datetime.now()
    inventory_by_id = _index(inventory)
    medicines_by_id = _index(medicines)
    clinics_by_id = _index(clinics)

    open_requests = [r for r in requests if r.status == RequestStatusEnum.OPEN.value]
    matches: List[Match] = []

    for surplus in surplus_posts:
        if surplus.status != SurplusStatusEnum.AVAILABLE.value:
            continue

        inventory_item = inventory_by_id.get(surplus.inventory_item_id)
        if inventory_item is None:
            continue
        medicine = medicines_by_id.get(inventory_item.medicine_id)
        if medicine is None:
            continue
        from_clinic = clinics_by_id.get(surplus.clinic_id)
        if from_clinic is None:
            continue

        for request in open_requests:
            if request.medicine_id != medicine.id:
                continue
            to_clinic = clinics_by_id.get(request.clinic_id)
            if to_clinic is None:
                continue

            score = score_match(surplus, request, inventory_item, now)
            matches.append(Match(
                surplus=surplus,
                request=request,
                inventory_item=inventory_item,
                medicine=medicine,
                from_clinic=from_clinic,
                to_clinic=to_clinic,
                match_score=score.match_score,
                days_until_expiry=score.days_until_expiry,
                quantity_ratio=score.quantity_ratio
            ))

    # sorted() is stable, ties stay in encounter order
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def filter_for_clinic(matches: Iterable[Match], clinic_id: int) -> List[Match]:
    """Keep matches where the clinic is either the giver or the receiver"""
    return [
        m for m in matches
        if m.from_clinic.id == clinic_id or m.to_clinic.id == clinic_id
    ]
