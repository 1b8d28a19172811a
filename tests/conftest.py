"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from grantflow.core.approval import HistoryEntry
from grantflow.core.catalog import load_workflow_config

BASE_DATE = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def workflow_config():
    """Workflow configuration built from the built-in defaults."""
    return load_workflow_config()


@pytest.fixture
def markers(workflow_config):
    return workflow_config.markers


@pytest.fixture
def approver(workflow_config):
    """Look up a default approver by role."""
    return workflow_config.directory.for_stage


@pytest.fixture
def make_entry():
    """Build history entries one day apart from BASE_DATE."""
    def _make(stage: str, comment: str = "", day: int = 0, actor=None) -> HistoryEntry:
        return HistoryEntry(
            stage=stage,
            date=BASE_DATE + timedelta(days=day),
            comment=comment,
            actor=actor,
        )
    return _make


@pytest.fixture
def sample_yaml_config():
    """Workflow configuration dictionary in the YAML shape."""
    return {
        "permissions": [
            {"permission": "Reports.Read", "type": "Delegated", "description": "Read reports"},
            {"permission": "Reports.Export", "type": "Application", "glr": True},
        ],
        "approvers": [
            {"uniqueId": "lead", "role": "Team Lead", "name": "Alex Morgan", "order": 1},
            {"uniqueId": "legal", "role": "Legal", "name": "Legal Desk", "order": 2},
            {"uniqueId": "owner", "role": "App Owner", "name": "Platform Owner", "order": 3},
        ],
        "policy": [
            {"stage": "Team Lead"},
            {"stage": "Legal", "when": {"glr": True}},
            {"stage": "App Owner", "when": {"type": "Application"}},
        ],
        "complete_stage": "Closed",
    }


@pytest.fixture
def client():
    """FastAPI test client."""
    from fastapi.testclient import TestClient
    from grantflow.api.main import app

    with TestClient(app) as test_client:
        yield test_client
