import json
import logging

from revo.infra.logging import HumanReadableFormatter, JSONFormatter, RunLogger


def _read_jsonl(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_json_file_receives_structured_fields(tmp_path):
    logger = RunLogger().init(logs_dir=tmp_path, json_file="run.jsonl", logger_name="revo.test.json")
    logger.info("tree_resolved", type="tree_resolved", repo="octo/demo", strategy="commit", entries=3)
    logger.debug("hidden", type="hidden")
    logger.shutdown(logger)

    records = _read_jsonl(tmp_path / "run.jsonl")
    assert len(records) == 1
    rec = records[0]
    assert rec["message"] == "tree_resolved"
    assert rec["level"] == "INFO"
    assert rec["logger"] == "revo.test.json"
    assert rec["repo"] == "octo/demo"
    assert rec["strategy"] == "commit"
    assert rec["entries"] == 3


def test_debug_level_and_append(tmp_path):
    logger = RunLogger().init(logs_dir=tmp_path, json_file="run.jsonl", logger_name="revo.test.debug", level="debug")
    logger.debug("sample_missing", type="sample_missing", path="a.py")
    logger.shutdown(logger)

    logger = RunLogger().init(logs_dir=tmp_path, json_file="run.jsonl", logger_name="revo.test.debug")
    logger.warning("worker_unavailable", error="no threads")
    logger.shutdown(logger)

    records = _read_jsonl(tmp_path / "run.jsonl")
    assert [r["message"] for r in records] == ["sample_missing", "worker_unavailable"]
    assert records[1]["level"] == "WARNING"


def test_exception_records_traceback(tmp_path):
    logger = RunLogger().init(logs_dir=tmp_path, json_file="run.jsonl", logger_name="revo.test.exc")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("run_crashed", run_id=4)
    logger.shutdown(logger)

    rec = _read_jsonl(tmp_path / "run.jsonl")[0]
    assert rec["run_id"] == 4
    assert "RuntimeError: boom" in rec["exc_info"]


def test_no_handlers_without_file_or_console(tmp_path):
    logger = RunLogger().init(logs_dir=tmp_path, logger_name="revo.test.silent")
    logger.info("nothing")
    assert logging.getLogger("revo.test.silent").handlers == []
    assert list(tmp_path.iterdir()) == []
    logger.shutdown(logger)


def test_console_output(tmp_path, capsys):
    logger = RunLogger().init(logs_dir=tmp_path, logger_name="revo.test.console", console_output=True)
    logger.info("run_started", repo="octo/demo")
    logger.shutdown(logger)

    err = capsys.readouterr().err
    assert "INFO - run_started" in err


def test_human_formatter():
    record = logging.LogRecord("revo", logging.WARNING, __file__, 1, "worker_unavailable", None, None)
    assert " - WARNING - worker_unavailable" in HumanReadableFormatter().format(record)


def test_json_formatter_single_line():
    record = logging.LogRecord("revo", logging.INFO, __file__, 1, "files_selected", None, None)
    record.selected = ["README.md", "src/index.js"]
    out = JSONFormatter().format(record)
    assert "\n" not in out
    assert json.loads(out)["selected"] == ["README.md", "src/index.js"]
