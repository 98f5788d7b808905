"""
Pytest fixtures for UI builder tests.

This module provides:
1. Settings fixtures (isolated from the environment)
2. Configuration fixtures (empty, question-and-follow-up, nested containers)
3. Builder controller fixtures backed by the in-memory store
"""

import pytest

from uibuilder.config import Settings
from uibuilder.models.contracts.configuration import Configuration
from uibuilder.services.builder import UIBuilderController
from uibuilder.services.persistence import InMemoryConfigurationStore


# ==================== SETTINGS ====================


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only; no .env or UIBUILDER_* variables."""
    return Settings(_env_file=None, environment="testing")


# ==================== CONFIGURATIONS ====================


@pytest.fixture
def empty_configuration() -> Configuration:
    return Configuration(
        id="cfg-empty",
        name="Empty",
        project_id="proj-1",
    )


@pytest.fixture
def question_configuration() -> Configuration:
    """q1 is a yes/no select; q2 is only shown when q1 == 'yes'."""
    return Configuration.model_validate({
        "id": "cfg-questions",
        "name": "Questions",
        "version": 3,
        "projectId": "proj-1",
        "pipelineMode": "ANNOTATION",
        "fileType": "TEXT",
        "layout": {"type": "two-column", "columns": 2, "gap": 16},
        "widgets": [
            {
                "id": "q2",
                "type": "TEXT_INPUT",
                "label": "Why yes?",
                "order": 1,
                "conditionalDisplay": [{"field": "q1", "operator": "equals", "value": "yes"}],
            },
            {
                "id": "q1",
                "type": "SELECT",
                "label": "Is it relevant?",
                "required": True,
                "order": 0,
                "options": [
                    {"id": "o-yes", "label": "Yes", "value": "yes"},
                    {"id": "o-no", "label": "No", "value": "no"},
                ],
            },
        ],
    })


@pytest.fixture
def nested_configuration() -> Configuration:
    """A container holding a text input, next to a top-level checkbox."""
    return Configuration.model_validate({
        "id": "cfg-nested",
        "name": "Nested",
        "projectId": "proj-1",
        "widgets": [
            {"id": "box", "type": "CONTAINER", "children": ["name"], "order": 0,
             "position": {"x": 10, "y": 10}, "size": {"width": 600, "height": 300}},
            {"id": "name", "type": "TEXT_INPUT", "label": "Name", "order": 1,
             "position": {"x": 20, "y": 20}},
            {"id": "agree", "type": "CHECKBOX", "label": "Agree", "order": 2,
             "position": {"x": 20, "y": 400}},
        ],
    })


# ==================== BUILDER ====================


@pytest.fixture
def store() -> InMemoryConfigurationStore:
    return InMemoryConfigurationStore()


@pytest.fixture
def builder(store, empty_configuration, settings) -> UIBuilderController:
    """Builder opened on an empty configuration with a 1200x800 canvas."""
    return UIBuilderController(store=store, configuration=empty_configuration, settings=settings)
