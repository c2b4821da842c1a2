import csv
import os

import openpyxl
import pytest

from hmi_translator import main as cli
from hmi_translator.engine import OutcomeKind
from hmi_translator.exceptions import ConfigurationError
from hmi_translator.handlers import XlsxSheet

from conftest import FakeTranslator, HEADERS


@pytest.fixture(autouse=True)
def no_slack(monkeypatch):
    monkeypatch.setattr(cli, "SLACK_WEBHOOK_URL", "")
    monkeypatch.setattr(cli, "ROW_DELAY_SECONDS", 0)


def answers(*values):
    values = list(values)

    def _input(prompt=""):
        return values.pop(0)

    return _input


def table(*sources):
    rows = [HEADERS]
    for i, source in enumerate(sources, start=1):
        rows.append([i, f"Text_{i}", "Alarm", "G1", "", source, None])
    return rows


def test_list_input_files_skips_previous_outputs(tmp_path):
    for name in ["b.xlsx", "a.xlsx", "translated-a.xlsx", "notes.txt", "~$a.xlsx"]:
        (tmp_path / name).write_bytes(b"")
    files = cli.list_input_files(str(tmp_path))
    assert [os.path.basename(f) for f in files] == ["a.xlsx", "b.xlsx"]


def test_build_output_path():
    assert cli.build_output_path(os.path.join("dir", "HMI.xlsx")) == os.path.join("dir", "translated-HMI.xlsx")
    assert cli.build_output_path("HMI.xlsx", csv_output=True) == "translated-HMI.csv"


def test_parse_choice():
    assert cli.parse_choice("2", 3) == 2
    assert cli.parse_choice("", 3, default=1) == 1
    with pytest.raises(ConfigurationError):
        cli.parse_choice("4", 3)
    with pytest.raises(ConfigurationError):
        cli.parse_choice("x", 3)
    with pytest.raises(ConfigurationError):
        cli.parse_choice("", 3)


def test_language_columns_hide_metadata_and_reference_columns():
    assert cli.language_columns(HEADERS) == [(6, "de-DE"), (7, "fr-FR")]


def test_run_translates_workbook(make_workbook, tmp_path):
    make_workbook(table("Start_1", "Start_2", "##Tag##", "Text"), name="hmi.xlsx")
    translator = FakeTranslator({"Start_1": "Démarrer_1"})
    args = cli.parse_args(["--dir", str(tmp_path), "--mode", "full"])

    summary = cli.run(args, input_fn=answers("1", "", ""), translator=translator)

    out = tmp_path / "translated-hmi.xlsx"
    assert summary.output_path == str(out)
    ws = openpyxl.load_workbook(out).worksheets[0]
    assert [ws.cell(row=r, column=7).value for r in range(2, 6)] == ["Démarrer_1", "Démarrer_2", "##Tag##", None]
    assert ws.cell(row=1, column=7).value == "fr-FR"
    assert translator.calls == ["Start_1"]
    assert summary.count(OutcomeKind.REUSE) == 1


def test_run_writes_csv_and_asks_for_mode(make_workbook, tmp_path):
    make_workbook(table("Pump running"), name="hmi.xlsx")
    translator = FakeTranslator({"Pump running": "Pompe en marche"})
    args = cli.parse_args(["--csv", "--dir", str(tmp_path)])

    cli.run(args, input_fn=answers("1", "6", "7", "2"), translator=translator)

    with open(tmp_path / "translated-hmi.csv", encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[1][6] == "Pompe en marche"
    assert not (tmp_path / "translated-hmi.xlsx").exists()


def test_run_without_files_is_a_configuration_error(tmp_path):
    args = cli.parse_args(["--dir", str(tmp_path)])
    with pytest.raises(ConfigurationError):
        cli.run(args, input_fn=answers(), translator=FakeTranslator())


def test_run_rejects_same_source_and_target(make_workbook, tmp_path):
    make_workbook(table("Pump running"), name="hmi.xlsx")
    args = cli.parse_args(["--dir", str(tmp_path), "--mode", "full"])
    with pytest.raises(ConfigurationError):
        cli.run(args, input_fn=answers("1", "6", "6"), translator=FakeTranslator())


def test_main_returns_error_code_on_setup_error(monkeypatch, tmp_path):
    def fail(args, input_fn=input, translator=None):
        raise ConfigurationError("no key")

    monkeypatch.setattr(cli, "run", fail)
    assert cli.main(["--dir", str(tmp_path)]) == 1


def test_main_reports_save_failure_after_processing_rows(monkeypatch, make_workbook, tmp_path, capsys):
    make_workbook(table("Pump running", "Door open"), name="hmi.xlsx")
    translator = FakeTranslator()
    real_run = cli.run

    def run_with_fakes(args):
        return real_run(args, input_fn=answers("1", "", ""), translator=translator)

    def locked_save(self, path):
        raise PermissionError(f"{path} is open in another program")

    monkeypatch.setattr(cli, "run", run_with_fakes)
    monkeypatch.setattr(XlsxSheet, "save", locked_save)

    assert cli.main(["--dir", str(tmp_path), "--mode", "full"]) == 1
    assert translator.calls == ["Pump running", "Door open"]
    assert not (tmp_path / "translated-hmi.xlsx").exists()
    output = capsys.readouterr().out
    assert "File error" in output
    assert "translated-hmi.xlsx" in output


def test_main_reports_bad_setting_as_setup_error(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "validate_config", lambda: (False, "HMI_TRANSLATOR_TIMEOUT must be a number."))

    assert cli.main(["--dir", str(tmp_path)]) == 1
    assert "Setup error: HMI_TRANSLATOR_TIMEOUT must be a number." in capsys.readouterr().out
