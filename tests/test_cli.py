"""End-to-end tests for the command-line entry points."""

import logging

import pytest

from gastally.cli import crongas, lotusgas, main


@pytest.fixture
def two_call_cron(write_json, cron_document, node):
    return write_json(cron_document(node(from_actor="f00", to_actor="f03", charges=[10], subcalls=[node(from_actor="f03", to_actor="f04", charges=[20])])))


class TestMain:
    def test_cron_report(self, two_call_cron, capsys):
        assert main(["cron", two_call_cron]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "f00->f03:0 self:10 total:30",
            "  f03->f04:0 self:20 total:20",
            "Total gas: 30",
        ]

    def test_depth_truncates_display_only(self, two_call_cron, capsys):
        assert main(["cron", "--depth", "1", two_call_cron]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "f00->f03:0 self:10 total:30",
            "Total gas: 30",
        ]

    def test_depth_zero(self, two_call_cron, capsys):
        assert main(["cron", "--depth", "0", two_call_cron]) == 0
        assert capsys.readouterr().out.splitlines() == ["Total gas: 30"]

    def test_messages_report(self, write_json, message_document, node, capsys):
        path = write_json(message_document(("bafy1", node(charges=[1234]))))
        assert main(["messages", path]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "call\tself\ttotal",
            "bafy1",
            "f01→f02:0\t       1,234\t       1,234",
        ]

    def test_missing_from_aborts_without_output(self, write_json, cron_document, node, capsys, caplog):
        raw = node(charges=[10])
        del raw["Msg"]["From"]
        path = write_json(cron_document(raw))
        with caplog.at_level(logging.ERROR):
            assert main(["cron", path]) == 1
        assert capsys.readouterr().out == ""
        assert "Failed to load trace" in caplog.text

    def test_malformed_message_list_prints_no_header(self, write_json, message_document, node, capsys):
        path = write_json(message_document(("bafy1", node()), ("bafy2", {"Msg": {}})))
        assert main(["messages", path]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_file(self, tmp_path, capsys):
        assert main(["cron", str(tmp_path / "missing.json")]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("not json")
        assert main(["messages", str(path)]) == 1
        assert capsys.readouterr().out == ""

    def test_negative_depth_is_usage_error(self, two_call_cron):
        with pytest.raises(SystemExit) as exc:
            main(["cron", "--depth", "-1", two_call_cron])
        assert exc.value.code == 2

    def test_variant_required(self, two_call_cron):
        with pytest.raises(SystemExit) as exc:
            main([two_call_cron])
        assert exc.value.code == 2


class TestShorthands:
    def test_crongas(self, two_call_cron, capsys):
        assert crongas(["--depth", "1", two_call_cron]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "Total gas: 30"

    def test_lotusgas(self, write_json, message_document, node, capsys):
        path = write_json(message_document(("bafy1", node(charges=[5], subcalls=[node(charges=[6])]))))
        assert lotusgas([path]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:2] == ["call\tself\ttotal", "bafy1"]
        assert lines[2] == "f01→f02:0\t           5\t          11"
        assert len(lines) == 4

    def test_lotusgas_rejects_cron_document(self, two_call_cron, capsys):
        assert lotusgas([two_call_cron]) == 1
        assert capsys.readouterr().out == ""


class TestLoadFailures:
    def test_infinity_charge_aborts_before_header(self, write_json, message_document, node, capsys):
        path = write_json(message_document(("bafy1", node(charges=[float("inf")]))))
        assert main(["messages", path]) == 1
        assert capsys.readouterr().out == ""

    def test_overflowing_charges_abort(self, write_json, cron_document, node, capsys):
        path = write_json(cron_document(node(charges=[1e308, 1e308])))
        assert main(["cron", path]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_utf8_aborts(self, tmp_path, capsys, caplog):
        path = tmp_path / "trace.json"
        path.write_bytes(b'{"value": {"active": {"ExecutionTrace": {"Msg": {"From": "f0\xff"}}}}}')
        with caplog.at_level(logging.ERROR):
            assert main(["cron", str(path)]) == 1
        assert capsys.readouterr().out == ""
        assert "Failed to load trace" in caplog.text


class TestLogLevel:
    def test_debug_level_applies_to_package(self, two_call_cron, caplog):
        assert main(["cron", "--log-level", "DEBUG", two_call_cron]) == 0
        assert logging.getLogger("gastally").level == logging.DEBUG
        assert any(r.name == "gastally.loader" and r.levelno == logging.DEBUG for r in caplog.records)
