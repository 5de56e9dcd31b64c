"""
bylawcheck Test Suite Configuration

pytest configuration and fixtures for testing the bylawcheck package.
"""

import pytest


KNOWLEDGE_ENV_VARS = (
    "LLAMACLOUD_API_KEY",
    "LLAMACLOUD_ENDPOINT",
    "LLAMACLOUD_DOCUMENT_ID",
)


# ===== Fixtures =====

@pytest.fixture(autouse=True)
def no_knowledge_service_env(monkeypatch):
    """Keep developer credentials from leaking into tests."""
    for var in KNOWLEDGE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_row():
    """Raw CSV-style row with string cells."""
    return {
        "project_name": "Green Tower 2",
        "plot_area_sqm": "1200",
        "built_area_sqm": "1400",
        "height_m": "10",
        "floors": "3",
        "front_setback_m": "8",
        "rear_setback_m": "4",
        "side_setback_m": "4",
        "parking_spots": "20",
        "building_type": "residential",
        "location": "Koramangala, Bangalore",
        "far_utilized": "1.0",
    }


@pytest.fixture
def sample_record(sample_row):
    """Normalized record for sample_row."""
    from bylawcheck.core import normalize
    return normalize(sample_row)


@pytest.fixture
def default_rules():
    from bylawcheck.config import DEFAULT_RULES
    return DEFAULT_RULES


@pytest.fixture
def external_rules_reply():
    """Well-formed rules reply as a decoded JSON object."""
    return {
        "height_max": 15,
        "height_clause": "BBMP 2019, Clause 4.3.1",
        "setback": {
            "front": 6,
            "rear": 2.5,
            "side": 2,
            "front_clause": "Clause 5.1.1(a)",
            "rear_clause": "Clause 5.1.2(a)",
            "side_clause": "Clause 5.1.3(a)",
        },
        "parking_min": 12,
        "parking_clause": "Clause 6.2.2",
        "far_max": 1.75,
        "far_clause": "Table 5.4.2",
    }


@pytest.fixture
def sleeps():
    """Records backoff waits instead of sleeping."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def knowledge_config():
    """Fully configured knowledge-service settings."""
    from bylawcheck.config import KnowledgeServiceConfig
    return KnowledgeServiceConfig(
        api_key="test-key",
        endpoint="https://example.invalid/query",
        document_id="doc-123",
    )


# ===== Test Configuration =====

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
