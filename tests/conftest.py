"""
Pytest configuration for Stepwise tests.
"""
import sys
import os

import pytest

# Make `import stepwise` work from a source checkout and expose tests/helpers.py
_TESTS = os.path.abspath(os.path.dirname(__file__))
_ROOT = os.path.abspath(os.path.join(_TESTS, '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

for _p in (_TESTS, _SRC_DIR):
	if _p not in sys.path:
		sys.path.insert(0, _p)

from helpers import Recorder  # noqa: E402


@pytest.fixture
def recorder():
	return Recorder()
