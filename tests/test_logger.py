import logging
import subprocess
import sys
from pathlib import Path

from farc3.utils.logger import PACKAGE_LOGGER, configure_logging, get_logger


def test_import_leaves_root_logger_alone():
    code = (
        "import logging, farc3\n"
        "root = logging.getLogger()\n"
        "print(len(root.handlers), logging.getLevelName(root.level))\n"
        "logging.basicConfig(level=logging.DEBUG)\n"
        "print(logging.getLevelName(root.level))\n"
    )
    out = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True,
        cwd=Path(__file__).resolve().parent.parent,
    ).stdout.split("\n")
    assert out[:2] == ["0 WARNING", "DEBUG"]


def test_get_logger_does_not_add_handlers():
    root = logging.getLogger()
    before = (list(root.handlers), root.level)
    assert get_logger().name == PACKAGE_LOGGER
    assert get_logger("farc3.core.system").name == "farc3.core.system"
    assert (list(root.handlers), root.level) == before


def test_configure_logging_replaces_its_own_handler():
    logger = logging.getLogger(PACKAGE_LOGGER)
    root = logging.getLogger()
    root_handlers = list(root.handlers)
    try:
        configure_logging(logging.DEBUG)
        configure_logging(logging.INFO)
        ours = [h for h in logger.handlers if h.get_name() == "farc3-console"]
        assert len(ours) == 1
        assert logger.level == logging.INFO
        assert list(root.handlers) == root_handlers
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
