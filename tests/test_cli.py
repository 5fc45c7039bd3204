import json

from mortality.cli import main


def test_summary(csv_path, capsys):
    assert main(["summary", str(csv_path)]) == 0
    out = capsys.readouterr().out
    assert "2015 to 2016" in out
    assert "Top causes in 2016" in out
    assert "Heart disease" in out


def test_causes_for_year(csv_path, capsys):
    assert main(["causes", str(csv_path), "--year", "2015", "--top", "2"]) == 0
    out = capsys.readouterr().out
    assert "Cancer" in out
    assert "Stroke" not in out


def test_causes_state_policy(csv_path, capsys):
    assert main(["causes", str(csv_path), "--policy", "states"]) == 0
    out = capsys.readouterr().out
    assert "53,100" in out


def test_leading(csv_path, capsys):
    assert main(["leading", str(csv_path), "--year", "2016"]) == 0
    out = capsys.readouterr().out
    assert "OR" in out and "Oregon" in out
    assert "United States" not in out


def test_export_is_json(csv_path, capsys):
    assert main(["export", str(csv_path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["national_policy"] == "national"
    assert len(payload["tables"]["normalized"]) == 24
    assert payload["tables"]["by_cause"][0] == {
        "year": 2015, "cause": "Heart disease", "deaths": 633842, "rank": 1,
    }
    assert payload["schemas"]["leading_by_state"]["state_code"] == "str | None"


def test_schema(capsys):
    assert main(["schema"]) == 0
    out = capsys.readouterr().out
    assert "leading_by_state" in out
    assert "cause_known" in out


def test_missing_file_exits_nonzero(tmp_path, capsys):
    assert main(["summary", str(tmp_path / "missing.csv")]) == 1
    assert "[load]" in capsys.readouterr().err


def test_integrity_error_and_drop_flag(write_csv, capsys):
    path = write_csv([
        (2010, "Oregon", "Cancer", -3, 150.0),
        (2010, "Oregon", "Stroke", 100, 30.0),
        (2010, "United States", "Stroke", 1000, 30.0),
    ])
    assert main(["leading", str(path)]) == 1
    assert "[normalize]" in capsys.readouterr().err
    assert main(["leading", str(path), "--drop-invalid"]) == 0
    assert "Stroke" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_header_only_file_prints_no_data(tmp_path, capsys):
    path = tmp_path / "header_only.csv"
    path.write_text("Year,Cause Name,State,Deaths,Age-adjusted Death Rate\n")
    for command in ("causes", "leading"):
        assert main([command, str(path)]) == 0
        out = capsys.readouterr().out
        assert "No data" in out
        assert "None" not in out


def test_banner_uses_year_label(csv_path, capsys):
    assert main(["causes", str(csv_path)]) == 0
    assert "CAUSES BY DEATHS (2016)" in capsys.readouterr().out
    assert main(["leading", str(csv_path), "--year", "1999"]) == 0
    assert "No data for 1999" in capsys.readouterr().out


def test_non_positive_top_exits_nonzero(csv_path, capsys):
    assert main(["causes", str(csv_path), "--top", "0"]) == 1
    err = capsys.readouterr().err
    assert "[aggregate]" in err
    assert "positive" in err
