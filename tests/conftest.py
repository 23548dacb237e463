from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(scope="session")
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def samples_dir(project_root: Path) -> Path:
    return project_root / "samples"


@pytest.fixture
def estimate_note() -> str:
    from .sample_data import ESTIMATE_NOTE

    return ESTIMATE_NOTE
