import json

import pytest

pytest.importorskip("pydantic_settings")

from heirloom.cli import main

SAMPLE = """0 @I1@ INDI
1 NAME Jane /Doe/
1 FAMC @F1@
0 @I2@ INDI
1 NAME John /Doe/
1 FAMS @F1@
0 @F1@ FAM
1 HUSB @I2@
1 CHIL @I1@
"""


def test_import_command_prints_summary(tmp_path, capsys):
    source = tmp_path / "family.ged"
    source.write_text(SAMPLE, encoding="utf-8")

    exit_code = main(["import", str(source), "--user-id", "user-1", "--max-generations", "1"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["profile_count"] == 2
    assert payload["persisted"] is False
    by_name = {profile["name"]: profile for profile in payload["profiles"]}
    assert by_name["Jane Doe"]["parents"] == 1
    assert by_name["John Doe"]["children"] == 1
