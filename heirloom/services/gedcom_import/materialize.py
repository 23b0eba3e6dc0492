from __future__ import annotations

import logging
from dataclasses import dataclass

from heirloom.services.gedcom_import.generations import within_window
from heirloom.services.gedcom_import.records import FamilyRecord, IndividualRecord, Profile
from heirloom.services.identifiers import profile_id_for
from heirloom.services.placeholders import placeholder_portrait

logger = logging.getLogger(__name__)


@dataclass
class MaterializedGraph:
    profiles: list[Profile]
    profile_ids: dict[str, str]

    def __post_init__(self) -> None:
        self._by_id = {profile.id: profile for profile in self.profiles}

    def profile_for(self, xref: str | None) -> Profile | None:
        if not xref or xref not in self.profile_ids:
            return None
        return self._by_id[self.profile_ids[xref]]


def _add_unique(ids: list[str], value: str) -> None:
    if value not in ids:
        ids.append(value)


def link_spouses(left: Profile, right: Profile) -> None:
    _add_unique(left.spouse_ids, right.id)
    _add_unique(right.spouse_ids, left.id)


def link_parent_child(parent: Profile, child: Profile) -> None:
    _add_unique(child.parent_ids, parent.id)
    _add_unique(parent.child_ids, child.id)


def archival_summary(name: str) -> str:
    return f"Archival record for {name}."


def materialize_profiles(
    individuals: dict[str, IndividualRecord],
    families: dict[str, FamilyRecord],
    generations: dict[str, int],
    *,
    max_generations: int,
    user_id: str,
    stamp: str,
) -> MaterializedGraph:
    survivors = within_window(generations, max_generations)
    profile_ids = {xref: profile_id_for(stamp, xref) for xref in individuals if xref in survivors}

    profiles = [
        Profile(
            id=profile_ids[xref],
            user_id=user_id,
            name=person.name,
            gender=person.gender,
            birth_year=person.birth_year,
            death_year=person.death_year,
            image_url=placeholder_portrait(person.gender),
            summary=archival_summary(person.name),
            is_memorial=True,
            timeline=list(person.timeline),
        )
        for xref, person in individuals.items()
        if xref in profile_ids
    ]
    graph = MaterializedGraph(profiles=profiles, profile_ids=profile_ids)

    for family in families.values():
        husband = graph.profile_for(family.husband)
        wife = graph.profile_for(family.wife)
        if husband and wife and husband is not wife:
            link_spouses(husband, wife)
        for child_key in family.children:
            child = graph.profile_for(child_key)
            if child is None:
                continue
            for parent in (husband, wife):
                if parent is not None and parent is not child:
                    link_parent_child(parent, child)

    logger.debug(
        "Materialized %d of %d individuals within %d generations",
        len(profiles),
        len(individuals),
        max_generations,
    )
    return graph
