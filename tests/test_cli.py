"""Test the command line interface."""
import json

import pytest

from fisio.cli import build_parser, main


def run(argv):
    """Run the CLI, returning the exit code (0 when main returns normally)."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


def test_patients_on_prints_matches(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "patients-on", "--date", "2023-04-18"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["1 | Ana", "3 | Beatriz"]


def test_patients_on_json_output(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "patients-on", "--date", "2023-04-19", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [{"id": 2, "name": "Carlos"}]


def test_patients_on_empty_result(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "patients-on", "--date", "2020-01-01"]) == 0
    assert "Nessun risultato." in capsys.readouterr().out


def test_patients_on_default_date_uses_bundled_dataset(capsys):
    assert run(["patients-on", "--json"]) == 0
    assert [p["id"] for p in json.loads(capsys.readouterr().out)] == [1, 2]


def test_invalid_date_exits_with_error(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "patients-on", "--date", "18/04/2023"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Errore: Data non valida" in captured.err


def test_appointments_for_known_name(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "appointments-for", "--name", "Camila", "--json"]) == 0
    assert [a["id"] for a in json.loads(capsys.readouterr().out)] == [101, 105]


def test_appointments_for_unknown_name_exits_1(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "appointments-for", "--name", "Alice"]) == 1
    assert "Errore: Nessun fisioterapista con nome 'Alice'." in capsys.readouterr().err


def test_missing_dataset_file_exits_1(tmp_path, capsys):
    assert run(["--dataset", str(tmp_path / "nope.json"), "list", "pazienti"]) == 1
    assert "File dataset non trovato" in capsys.readouterr().err


def test_list_appointments(clinic_json, capsys):
    assert run(["--dataset", str(clinic_json), "list", "appuntamenti"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[0] == "100 | 2023-04-18T09:00:00Z | paziente 3 | fisioterapista 10"


def test_usage_error_exits_2():
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["list", "sale"])
    assert exc_info.value.code == 2


def test_import_db_then_query_from_db(clinic_json, sqlite_db, capsys):
    assert run(["--dataset", str(clinic_json), "import-db"]) == 0
    assert "14 record inseriti" in capsys.readouterr().out

    assert run(["--source", "db", "appointments-for", "--name", "Bruno", "--json"]) == 0
    assert [a["id"] for a in json.loads(capsys.readouterr().out)] == [100, 102, 104, 106]


def test_import_db_reset(clinic_json, sqlite_db, capsys):
    run(["--dataset", str(clinic_json), "import-db"])
    capsys.readouterr()
    assert run(["--dataset", str(clinic_json), "import-db", "--reset"]) == 0
    assert "14 record inseriti" in capsys.readouterr().out
