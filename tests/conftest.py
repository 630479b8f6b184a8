"""Shared test configuration: deterministic RNG and a clean anomaly switch."""
import os

import numpy as np
import pytest

import scalargrad as sg


@pytest.fixture(autouse=True)
def _seed_and_reset():
    """Seed NumPy's RNG and restore the anomaly-detection flag afterwards."""
    np.random.seed(int(os.environ.get("SCALARGRAD_TEST_SEED", "12345")))
    prev = sg.is_anomaly_enabled()
    yield
    sg.set_detect_anomaly(prev)
