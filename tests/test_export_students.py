import json

import pytest

import export_students
from registry import LocalStorage, save_records


@pytest.fixture
def config_file(tmp_path, sample_records, monkeypatch):
    """A config pointing at a storage file that already holds the sample records."""
    monkeypatch.setattr(export_students, "configure_logging", lambda config: None)

    storage_path = tmp_path / "student_storage.json"
    save_records(LocalStorage(storage_path), sample_records)

    path = tmp_path / "config.json"
    path.write_text(json.dumps({"storage": {"path": str(storage_path)}}), encoding="utf-8")
    return path


class TestExportCli:

    def test_default_csv_export(self, config_file, tmp_path):
        out = tmp_path / "out"
        code = export_students.main(["--config", str(config_file), "--output", str(out)])

        assert code == 0
        lines = (out / "students.csv").read_text(encoding="utf-8").split("\n")
        assert len(lines) == 4

    def test_filtered_json_export(self, config_file, tmp_path, sample_records):
        out = tmp_path / "out"
        code = export_students.main([
            "--config", str(config_file),
            "--format", "json",
            "--search", "smith",
            "--output", str(out),
        ])

        assert code == 0
        exported = json.loads((out / "students.json").read_text(encoding="utf-8"))
        assert exported == sample_records[:2]

    def test_xlsx_export(self, config_file, tmp_path):
        out = tmp_path / "out"
        code = export_students.main(["--config", str(config_file), "--format", "xlsx", "--output", str(out)])
        assert code == 0
        assert (out / "students.xlsx").stat().st_size > 0

    def test_empty_view_fails(self, config_file, tmp_path, capsys):
        out = tmp_path / "out"
        code = export_students.main(["--config", str(config_file), "--course", "Civil", "--output", str(out)])

        assert code == 1
        assert "No data to export!" in capsys.readouterr().out
        assert not (out / "students.csv").exists()

    def test_missing_storage_fails(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(export_students, "configure_logging", lambda config: None)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"storage": {"path": str(tmp_path / "nothing.json")}}), encoding="utf-8")

        assert export_students.main(["--config", str(path)]) == 1
        assert "not found" in capsys.readouterr().out
