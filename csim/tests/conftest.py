"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `csim` package
without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (csim/tests -> csim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def write_trace(tmp_path):
    """Write trace lines to a temp file and return its path as a string."""
    def _write(lines, name='test.trace'):
        p = tmp_path / name
        p.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return str(p)
    return _write
