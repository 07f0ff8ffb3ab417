import os
import sys

import pytest

# Disable preallocation unless explicitly set.
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import jax

# Ensure src/ is importable when pytest runs without an editable install.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from addnet_core.ids import SequentialIdGenerator

_MARKER_DESCRIPTIONS = {
    "core": "node model, rule table and rewrite engine",
    "dataflow": "multiset collections, iterate and input sessions",
    "edits": "incremental edit protocol and revisions",
    "cli": "demo entry point and delta reporter",
}

_ADDNET_ENV = (
    "ADDNET_MAX_STEPS",
    "ADDNET_VALIDATE_MODE",
    "ADDNET_REWRITE_METRICS",
    "ADDNET_TRACE",
)

OUTPUT_ID = 0


def pytest_configure(config):
    for name, desc in _MARKER_DESCRIPTIONS.items():
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _set_default_device():
    device = jax.devices("cpu")[0]
    with jax.default_device(device):
        yield


@pytest.fixture(autouse=True)
def _clean_addnet_env(monkeypatch):
    for name in _ADDNET_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def id_gen():
    gen = SequentialIdGenerator(start=1)
    gen.reserve(OUTPUT_ID)
    return gen
