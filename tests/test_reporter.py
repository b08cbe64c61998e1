"""Tests for log sinks and Actions outputs."""
import io
import logging

from da_backup.reporter import ActionsReporter, Reporter


def read_outputs(path):
    """Parse the heredoc entries the runner reads back from GITHUB_OUTPUT."""
    lines = path.read_text(encoding="utf-8").splitlines()
    outputs = {}
    index = 0
    while index < len(lines):
        name, delimiter = lines[index].split("<<", 1)
        end = lines.index(delimiter, index + 1)
        outputs[name] = "\n".join(lines[index + 1:end])
        index = end + 1
    return outputs


class TestReporter:

    def test_records_outputs_and_failure(self, caplog):
        caplog.set_level(logging.INFO)
        reporter = Reporter()

        reporter.set_output("backup_folder_name", "backup-x")
        assert reporter.failed is False
        reporter.set_failed("boom")

        assert reporter.outputs == {"backup_folder_name": "backup-x"}
        assert reporter.failure == "boom"
        assert reporter.failed is True
        assert "Output backup_folder_name=backup-x" in caplog.text


class TestActionsReporter:

    def test_writes_outputs_file(self, tmp_path):
        output_file = tmp_path / "github_output"
        reporter = ActionsReporter(output_file=output_file, stream=io.StringIO())

        reporter.set_output("backup_folder_name", "backup-2025-03-04T05-06-07")
        reporter.set_output("error_message", "line one\nline two")

        assert read_outputs(output_file) == {
            "backup_folder_name": "backup-2025-03-04T05-06-07",
            "error_message": "line one\nline two",
        }

    def test_without_outputs_file(self):
        reporter = ActionsReporter(stream=io.StringIO())
        reporter.set_output("backup_folder_name", "no-backup-needed")
        assert reporter.outputs == {"backup_folder_name": "no-backup-needed"}

    def test_annotations(self):
        stream = io.StringIO()
        reporter = ActionsReporter(stream=stream)

        reporter.warning("Failed to move /a: 100% broken")
        reporter.error("first\nsecond")
        reporter.set_failed("boom")

        assert stream.getvalue().splitlines() == [
            "::warning::Failed to move /a: 100%25 broken",
            "::error::first%0Asecond",
            "::error::boom",
        ]
        assert reporter.failed is True

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "out"))
        assert ActionsReporter.from_env().output_file == tmp_path / "out"

        monkeypatch.delenv("GITHUB_OUTPUT")
        assert ActionsReporter.from_env().output_file is None
