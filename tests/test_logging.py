import logging

from linmath.core import mat2d, mat3, mat4, quat
from linmath.utils import configure_logging


def test_configure_logging_sets_level(clean_logger):
    logger = configure_logging({"logging.log_level": "DEBUG"})
    assert logger is clean_logger
    assert logger.level == logging.DEBUG


def test_configure_logging_does_not_duplicate_handlers(clean_logger):
    configure_logging()
    configure_logging()
    own = [h for h in clean_logger.handlers if getattr(h, "_linmath_handler", False)]
    assert len(own) == 1


def test_unknown_level_falls_back_to_info(clean_logger):
    logger = configure_logging({"logging.log_level": "chatty"})
    assert logger.level == logging.INFO


def test_log_file(tmp_path, clean_logger):
    log_file = tmp_path / "logs" / "linmath.log"
    logger = configure_logging({"logging.log_level": "DEBUG"}, log_file=log_file)
    logger.getChild("core").debug("проверка")
    for handler in logger.handlers:
        handler.flush()
    assert "проверка" in log_file.read_text(encoding="utf-8")


def test_singular_inversion_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="linmath"):
        assert mat4.invert(mat4.zero) is None
        assert mat3.invert(mat3.zero) is None
        assert mat2d.invert(mat2d.zero) is None
    messages = [r.getMessage() for r in caplog.records]
    assert sum("singular" in m for m in messages) == 3


def test_gimbal_lock_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="linmath"):
        quat.to_euler(quat.from_axis_angle([0, 1, 0], 90), "zyx")
    assert any("Gimbal lock" in r.getMessage() for r in caplog.records)


def test_zero_axis_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="linmath"):
        quat.axis_angle(quat.identity)
        mat4.from_rotation(30, [0, 0, 0])
    names = {r.name for r in caplog.records}
    assert {"linmath.core.quat", "linmath.core.mat4"} <= names
