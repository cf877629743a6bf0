import logging

import pytest

from intentelect.config.settings import reset_settings


@pytest.fixture
def restore_logging():
    """Undo what setup_logging does to the package and root loggers."""
    root = logging.getLogger()
    names = ("intentelect", "intentelect.summary")
    saved_root = list(root.handlers)
    saved = {
        name: (list(logging.getLogger(name).handlers), logging.getLogger(name).propagate, logging.getLogger(name).level)
        for name in names
    }
    yield
    for name, (handlers, propagate, level) in saved.items():
        lg = logging.getLogger(name)
        for handler in list(lg.handlers):
            if handler not in handlers:
                lg.removeHandler(handler)
                handler.close()
        lg.propagate = propagate
        lg.setLevel(level)
    for handler in saved_root:
        if handler not in root.handlers:
            root.addHandler(handler)
    logging.captureWarnings(False)
    reset_settings()
