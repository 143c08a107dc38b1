from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode runtime guards:
# - no external LLM traffic, every mentor operation degrades to its canned answer
# - workspace documents go to a throwaway directory
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LLM_PROVIDER", "none")
os.environ.setdefault("GEMINI_API_KEY", "")
os.environ.setdefault("RUNTIME_DATA_DIR", tempfile.mkdtemp(prefix="devmentor-tests-"))

from devmentor.core.app_metrics import reset_metrics  # noqa: E402
from devmentor.main import app  # noqa: E402


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture(autouse=True)
def _fresh_metrics():
    reset_metrics()
    yield
    reset_metrics()
