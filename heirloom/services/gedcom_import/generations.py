from __future__ import annotations

from collections.abc import Iterator

from heirloom.services.gedcom_import.records import FamilyRecord, IndividualRecord


def _neighbours(
    person: IndividualRecord,
    generation: int,
    families: dict[str, FamilyRecord],
) -> Iterator[tuple[str, int]]:
    if person.child_of_family:
        parents = families.get(person.child_of_family)
        if parents:
            if parents.husband:
                yield parents.husband, generation + 1
            if parents.wife:
                yield parents.wife, generation + 1
    for family_key in person.spouse_families:
        family = families.get(family_key)
        if family:
            for child_key in family.children:
                yield child_key, generation - 1


def compute_generations(
    home_xref: str | None,
    individuals: dict[str, IndividualRecord],
    families: dict[str, FamilyRecord],
) -> dict[str, int]:
    """Signed generation offset of every individual reachable from ``home_xref``.

    Ancestors are positive, descendants negative. Each individual keeps the
    offset of its first depth-first visit, so cyclic data still terminates.
    An explicit stack replaces recursion to stay clear of the interpreter's
    recursion limit on long lines of descent.
    """
    generations: dict[str, int] = {}
    if not home_xref:
        return generations

    stack: list[tuple[str, int]] = [(home_xref, 0)]
    while stack:
        xref, generation = stack.pop()
        if xref in generations or xref not in individuals:
            continue
        generations[xref] = generation
        pending = list(_neighbours(individuals[xref], generation, families))
        stack.extend(reversed(pending))
    return generations


def within_window(generations: dict[str, int], max_generations: int) -> set[str]:
    return {xref for xref, generation in generations.items() if abs(generation) <= max_generations}
