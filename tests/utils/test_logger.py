import importlib

import chronoatlas.utils.logger as logger_module


def test_nested_log_dir_is_created(monkeypatch, tmp_path):
    log_dir = tmp_path / "var" / "log" / "chronoatlas"
    try:
        with monkeypatch.context() as m:
            m.setenv("LOG_DIR", str(log_dir))
            reloaded = importlib.reload(logger_module)

            assert reloaded.LOG_DIR == log_dir
            assert log_dir.is_dir()
            assert any(path.is_dir() for path in log_dir.iterdir())
    finally:
        importlib.reload(logger_module)


def test_setup_logger_adds_handlers_once():
    logger = logger_module.setup_logger("logger_test_once")
    handler_count = len(logger.handlers)

    assert logger_module.setup_logger("logger_test_once") is logger
    assert len(logger.handlers) == handler_count == 2
