"""Line-level GEDCOM reader.

Each line is ``LEVEL TAG-OR-XREF REST...``. The reader is a small state machine
whose state is an immutable :class:`ParserState` value folded over the lines;
only the record tables it fills are mutated. Anything it does not understand
is skipped, never raised.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Literal

from heirloom.services.dates import extract_year
from heirloom.services.gedcom_import.records import (
    BIRTH,
    DEATH,
    EVENT_LABELS,
    UNKNOWN_NAME,
    FamilyRecord,
    Gender,
    IndividualRecord,
    LifeEvent,
)
from heirloom.services.identifiers import bare_xref, new_event_id

logger = logging.getLogger(__name__)

Context = Literal["none", "individual", "family"]

INDIVIDUAL_MARKER = "INDI"
FAMILY_MARKER = "FAM"

# CR/LF and blanks only; C1 controls such as \x85 are data.
_LINE_BREAK = re.compile(r"\r?\n")
_FIELD_SEPARATOR = re.compile(r"[ \t]+")


@dataclass(frozen=True)
class GedcomLine:
    level: str
    tag: str
    rest: str


@dataclass(frozen=True)
class ParserState:
    context: Context = "none"
    xref: str | None = None
    event_index: int | None = None
    family_event_open: bool = False
    home_xref: str | None = None


@dataclass
class ParsedRecords:
    individuals: dict[str, IndividualRecord] = field(default_factory=dict)
    families: dict[str, FamilyRecord] = field(default_factory=dict)
    home_xref: str | None = None
    skipped_lines: int = 0


def tokenize_line(raw: str) -> GedcomLine | None:
    parts = _FIELD_SEPARATOR.split(raw.strip(" \t\r\n"))
    if len(parts) < 2:
        return None
    return GedcomLine(level=parts[0], tag=parts[1], rest=" ".join(parts[2:]))


def _gender_from(value: str) -> Gender:
    code = value.strip().upper()
    if code == "M":
        return "male"
    if code == "F":
        return "female"
    return "unknown"


def _open_record(state: ParserState, line: GedcomLine, records: ParsedRecords) -> ParserState:
    key = bare_xref(line.tag)
    if line.rest == INDIVIDUAL_MARKER:
        records.individuals[key] = IndividualRecord(xref=key)
        return ParserState(context="individual", xref=key, home_xref=state.home_xref or key)
    if line.rest == FAMILY_MARKER:
        records.families[key] = FamilyRecord(xref=key)
        return ParserState(context="family", xref=key, home_xref=state.home_xref)
    return ParserState(home_xref=state.home_xref)


def _individual_line(
    state: ParserState,
    line: GedcomLine,
    person: IndividualRecord,
    stamp: str,
) -> ParserState:
    if line.level == "1":
        state = replace(state, event_index=None)
        if line.tag == "NAME":
            person.name = line.rest.replace("/", "").strip() or UNKNOWN_NAME
        elif line.tag == "SEX":
            person.gender = _gender_from(line.rest)
        elif line.tag == "FAMC":
            person.child_of_family = bare_xref(line.rest) or None
        elif line.tag == "FAMS":
            family_key = bare_xref(line.rest)
            if family_key and family_key not in person.spouse_families:
                person.spouse_families.append(family_key)
        elif line.tag in EVENT_LABELS:
            person.timeline.append(LifeEvent(id=new_event_id(stamp), type=EVENT_LABELS[line.tag]))
            state = replace(state, event_index=len(person.timeline) - 1)
        return state

    if line.level == "2" and state.event_index is not None:
        event = person.timeline[state.event_index]
        if line.tag == "DATE":
            event.date = line.rest
            year = extract_year(line.rest)
            if year and event.type == BIRTH:
                person.birth_year = year
            elif year and event.type == DEATH:
                person.death_year = year
        elif line.tag == "PLAC":
            event.place = line.rest
    return state


def _family_line(state: ParserState, line: GedcomLine, family: FamilyRecord) -> ParserState:
    if line.level == "1":
        state = replace(state, family_event_open=False)
        if line.tag == "HUSB":
            family.husband = bare_xref(line.rest) or None
        elif line.tag == "WIFE":
            family.wife = bare_xref(line.rest) or None
        elif line.tag == "CHIL":
            child_key = bare_xref(line.rest)
            if child_key and child_key not in family.children:
                family.children.append(child_key)
        elif line.tag == "MARR":
            state = replace(state, family_event_open=True)
        return state

    if line.level == "2" and state.family_event_open:
        if line.tag == "DATE":
            family.marriage_date = line.rest
        elif line.tag == "PLAC":
            family.marriage_place = line.rest
    return state


def advance(state: ParserState, line: GedcomLine, records: ParsedRecords, stamp: str) -> ParserState:
    """Apply one tokenized line and return the next parser state."""
    if line.level == "0":
        return _open_record(state, line, records)
    if state.context == "individual" and state.xref is not None:
        return _individual_line(state, line, records.individuals[state.xref], stamp)
    if state.context == "family" and state.xref is not None:
        return _family_line(state, line, records.families[state.xref])
    return state


def parse_records(text: str, stamp: str) -> ParsedRecords:
    records = ParsedRecords()
    state = ParserState()
    for raw_line in _LINE_BREAK.split(text):
        if not raw_line.strip(" \t\r\n"):
            continue
        line = tokenize_line(raw_line)
        if line is None:
            records.skipped_lines += 1
            continue
        state = advance(state, line, records, stamp)
    records.home_xref = state.home_xref
    logger.debug(
        "Parsed %d individuals and %d families (%d malformed lines skipped)",
        len(records.individuals),
        len(records.families),
        records.skipped_lines,
    )
    return records
