"""
Global pytest configuration and fixtures for eakwell tests
"""

import logging
import sys
from pathlib import Path

import pytest

# Add the src directory to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / 'src'))

from eakwell.config import set_config  # noqa: E402

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Suppress noisy logs during testing
logging.getLogger('aiohttp').setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Give every test the built-in defaults, unaffected by the environment"""
    for name in ('LOG_LEVEL', 'EAKWELL_LOG_LEVEL', 'EAKWELL_THROTTLE_INTERVAL',
                 'EAKWELL_WAIT_FOR_INTERVAL', 'EAKWELL_AJAX_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)
