"""App Lifespan — resource configuration happens at startup, not at import.

Tests:
    - Importing the app leaves JsonApiResource defaults untouched
    - Entering the lifespan applies policy and include parameter from settings
"""

import logging

import pytest

import jsonapi_compound.main as main_module
from jsonapi_compound.config import Settings
from jsonapi_compound.core.domain_types import UnknownRelationshipPolicy
from jsonapi_compound.core.includes import includes
from jsonapi_compound.core.resource import JsonApiResource
from jsonapi_compound.main import app, lifespan


def test_importing_app_leaves_resource_defaults_untouched():
    assert JsonApiResource.include_selector is includes
    assert JsonApiResource.unknown_relationship_policy is UnknownRelationshipPolicy.RAISE


@pytest.mark.asyncio
async def test_lifespan_applies_settings_to_resources(monkeypatch):
    # Registered so monkeypatch restores the class defaults afterwards
    monkeypatch.setattr(JsonApiResource, "include_selector", JsonApiResource.include_selector)
    monkeypatch.setattr(
        JsonApiResource, "unknown_relationship_policy",
        JsonApiResource.unknown_relationship_policy,
    )
    settings = Settings(
        _env_file=None, unknown_relationship_policy="wrap",
        include_query_param="with", log_format="text",
    )
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    handlers_before = list(logging.root.handlers)

    try:
        async with lifespan(app):
            assert JsonApiResource.unknown_relationship_policy is UnknownRelationshipPolicy.WRAP
            assert JsonApiResource.include_selector.query_param == "with"
    finally:
        for handler in list(logging.root.handlers):
            if handler not in handlers_before:
                logging.root.removeHandler(handler)
