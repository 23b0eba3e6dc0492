from __future__ import annotations

import logging
from datetime import UTC, datetime

from heirloom.config import get_settings
from heirloom.services.gedcom_import.generations import compute_generations
from heirloom.services.gedcom_import.materialize import materialize_profiles
from heirloom.services.gedcom_import.reconcile import reconcile_marriages
from heirloom.services.gedcom_import.records import FamilyTree, ImportResult
from heirloom.services.gedcom_import.tokenizer import parse_records
from heirloom.services.identifiers import bare_xref, new_import_stamp, tree_id_for

logger = logging.getLogger(__name__)

IMPORT_TREE_NAME = "Staged Import Tree"


def import_gedcom(
    text: str,
    user_id: str,
    max_generations: int | None = None,
    *,
    home_xref: str | None = None,
    now: datetime | None = None,
) -> ImportResult:
    """Turn GEDCOM text into memorial profiles plus one import tree.

    Only individuals within ``max_generations`` of the home individual are
    kept; a negative window keeps nobody. The home defaults to the first
    individual in the file; a ``home_xref`` that is not in the file falls back
    to that default.
    """
    if max_generations is None:
        max_generations = get_settings().default_max_generations

    created_at = now or datetime.now(UTC)
    stamp = new_import_stamp(created_at)
    records = parse_records(text, stamp)

    home = records.home_xref
    if home_xref:
        requested = bare_xref(home_xref)
        if requested in records.individuals:
            home = requested
        else:
            logger.warning("Home individual %s not found; using %s", home_xref, home)

    generations = compute_generations(home, records.individuals, records.families)
    graph = materialize_profiles(
        records.individuals,
        records.families,
        generations,
        max_generations=max_generations,
        user_id=user_id,
        stamp=stamp,
    )
    reconcile_marriages(graph, records.families.values(), stamp)

    home_profile = graph.profile_for(home)
    tree = FamilyTree(
        id=tree_id_for(stamp),
        user_id=user_id,
        name=IMPORT_TREE_NAME,
        created_at=created_at,
        home_person_id=home_profile.id if home_profile else None,
        member_ids=[profile.id for profile in graph.profiles],
    )
    logger.info(
        "Imported %d profiles for user %s (%d reachable, home=%s)",
        len(graph.profiles),
        user_id,
        len(generations),
        home,
    )
    return ImportResult(profiles=graph.profiles, tree=tree)
