"""Settings — verifies policy parsing and defaults."""

from jsonapi_compound.config import Settings
from jsonapi_compound.core.domain_types import UnknownRelationshipPolicy


def test_defaults_fail_fast_on_unknown_relationships(monkeypatch):
    monkeypatch.delenv("UNKNOWN_RELATIONSHIP_POLICY", raising=False)
    settings = Settings(_env_file=None)
    assert settings.unknown_relationship_policy is UnknownRelationshipPolicy.RAISE
    assert settings.include_query_param == "include"


def test_policy_read_case_insensitively_from_environment(monkeypatch):
    monkeypatch.setenv("UNKNOWN_RELATIONSHIP_POLICY", " WRAP ")
    settings = Settings(_env_file=None)
    assert settings.unknown_relationship_policy is UnknownRelationshipPolicy.WRAP


def test_include_parameter_name_is_configurable(monkeypatch):
    monkeypatch.setenv("INCLUDE_QUERY_PARAM", "with")
    assert Settings(_env_file=None).include_query_param == "with"
