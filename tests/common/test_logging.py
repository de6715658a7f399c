from __future__ import annotations

import logging

from sanitydb.common import configure_logging


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    try:
        configure_logging(level=logging.DEBUG, force=True)

        assert root.level == logging.DEBUG
        assert root.handlers
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
