import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
