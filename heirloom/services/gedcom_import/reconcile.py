from __future__ import annotations

from collections.abc import Iterable

from heirloom.services.gedcom_import.materialize import MaterializedGraph
from heirloom.services.gedcom_import.records import MARRIAGE, UNKNOWN_NAME, FamilyRecord, LifeEvent, Profile
from heirloom.services.identifiers import new_family_event_id


def _matching_marriage(person: Profile, marriage_date: str) -> LifeEvent | None:
    for event in person.timeline:
        if event.type != MARRIAGE:
            continue
        if event.date == marriage_date or (not event.date and not marriage_date):
            return event
    return None


def fold_marriage(person: Profile, spouse: Profile | None, family: FamilyRecord, stamp: str) -> LifeEvent:
    """Merge one family's marriage fact into ``person``'s timeline.

    An existing marriage with the same date (or with no date on either side)
    is updated in place; otherwise a new event is appended.
    """
    spouse_name = spouse.name if spouse else UNKNOWN_NAME
    marriage_date = family.marriage_date or ""
    existing = _matching_marriage(person, marriage_date)
    if existing:
        existing.spouse_name = spouse_name
        if family.marriage_place:
            existing.place = family.marriage_place
        return existing
    event = LifeEvent(
        id=new_family_event_id(stamp),
        type=MARRIAGE,
        date=marriage_date,
        place=family.marriage_place,
        spouse_name=spouse_name,
    )
    person.timeline.append(event)
    return event


def reconcile_marriages(graph: MaterializedGraph, families: Iterable[FamilyRecord], stamp: str) -> int:
    touched = 0
    for family in families:
        husband = graph.profile_for(family.husband)
        wife = graph.profile_for(family.wife)
        if husband:
            fold_marriage(husband, wife, family, stamp)
            touched += 1
        if wife:
            fold_marriage(wife, husband, family, stamp)
            touched += 1
    return touched
