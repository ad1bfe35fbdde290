import logging

from picstorm import logger as ps_logger


def _stderr_handlers(base: logging.Logger) -> list[logging.Handler]:
    return [
        h
        for h in base.handlers
        if isinstance(h, logging.StreamHandler) and getattr(h, "_picstorm_stderr", False)
    ]


def test_setup_logger_idempotent_handlers():
    """Calling setup_logger() repeatedly should leave exactly one stderr StreamHandler."""
    base = ps_logger.setup_logger(level=logging.DEBUG)
    _ = ps_logger.setup_logger(level=logging.DEBUG)
    _ = ps_logger.get_logger("controller")

    assert len(_stderr_handlers(base)) == 1
    assert base.propagate is False


def test_get_logger_returns_child():
    child = ps_logger.get_logger("pipeline")
    assert child.name == "picstorm.pipeline"
    assert ps_logger.get_logger() is logging.getLogger("picstorm")


def test_env_level_override(monkeypatch):
    monkeypatch.setenv("PICSTORM_LOG_LEVEL", "error")
    base = ps_logger.setup_logger(level=logging.DEBUG)
    assert base.level == logging.ERROR

    monkeypatch.delenv("PICSTORM_LOG_LEVEL")
    base = ps_logger.setup_logger(level=logging.INFO)
    assert base.level == logging.INFO


def test_category_filter(monkeypatch):
    monkeypatch.setenv("PICSTORM_LOG_CATS", "controller, decoder")
    base = ps_logger.setup_logger()
    handler = _stderr_handlers(base)[0]

    def record(name: str) -> logging.LogRecord:
        return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)

    assert handler.filter(record("picstorm.controller"))
    assert handler.filter(record("picstorm.decoder"))
    assert not handler.filter(record("picstorm.pipeline"))

    monkeypatch.delenv("PICSTORM_LOG_CATS")
    base = ps_logger.setup_logger()
    assert handler.filter(record("picstorm.pipeline"))
