from heirloom.services.gedcom_import.generations import compute_generations, within_window
from heirloom.services.gedcom_import.tokenizer import parse_records

THREE_GENERATIONS = """0 @I1@ INDI
1 NAME Home /Person/
1 FAMC @F1@
1 FAMS @F2@
0 @I2@ INDI
1 NAME Father /Person/
1 FAMC @F3@
1 FAMS @F1@
0 @I3@ INDI
1 NAME Mother /Person/
1 FAMS @F1@
0 @I4@ INDI
1 NAME Child /Person/
1 FAMC @F2@
0 @I5@ INDI
1 NAME Grandfather /Person/
1 FAMS @F3@
0 @I6@ INDI
1 NAME Stranger /Elsewhere/
0 @F1@ FAM
1 HUSB @I2@
1 WIFE @I3@
1 CHIL @I1@
0 @F2@ FAM
1 HUSB @I1@
1 CHIL @I4@
0 @F3@ FAM
1 HUSB @I5@
1 CHIL @I2@
"""


def test_generations_are_signed_offsets_from_home():
    records = parse_records(THREE_GENERATIONS, "1")
    generations = compute_generations(records.home_xref, records.individuals, records.families)
    assert generations == {"I1": 0, "I2": 1, "I3": 1, "I4": -1, "I5": 2}


def test_generation_differs_by_one_across_each_parent_link():
    records = parse_records(THREE_GENERATIONS, "1")
    generations = compute_generations("I1", records.individuals, records.families)
    for family in records.families.values():
        for child in family.children:
            for parent in (family.husband, family.wife):
                if parent in generations and child in generations:
                    assert generations[parent] - generations[child] == 1


def test_traversal_terminates_on_cycles():
    looped = """0 @I1@ INDI
1 FAMC @F1@
1 FAMS @F1@
0 @I2@ INDI
1 FAMS @F1@
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I2@
1 CHIL @I1@
1 CHIL @I2@
"""
    records = parse_records(looped, "1")
    generations = compute_generations("I1", records.individuals, records.families)
    assert set(generations) == {"I1", "I2"}
    assert generations["I1"] == 0


def test_missing_home_or_dangling_references():
    records = parse_records("0 @I1@ INDI\n1 FAMC @F404@\n1 FAMS @F405@\n", "1")
    assert compute_generations(None, records.individuals, records.families) == {}
    assert compute_generations("I1", records.individuals, records.families) == {"I1": 0}


def test_within_window_uses_absolute_distance():
    generations = {"a": 0, "b": 1, "c": -1, "d": 2, "e": -3}
    assert within_window(generations, 0) == {"a"}
    assert within_window(generations, 1) == {"a", "b", "c"}
    assert within_window(generations, 3) == set(generations)
