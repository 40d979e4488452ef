"""
Shared test fixtures and helpers for the restbind test suite.
"""

import pytest

from restbind import (
    BindingMetadata,
    ParameterSource,
    ResourceBinding,
    ResourceDefinition,
    ResourceMethod,
    ResourceParameter,
)


# ============================================================================
# Declaration Helpers
# ============================================================================


def make_definition(name: str = "org.example.rs.PersonRSDefinition") -> ResourceDefinition:
    return ResourceDefinition(qualified_name=name)


def path_param(name: str, type_name: str = "java.lang.String", **kwargs) -> ResourceParameter:
    return ResourceParameter(name, type_name, ParameterSource.PATH, **kwargs)


def query_param(name: str, type_name: str = "java.lang.String", **kwargs) -> ResourceParameter:
    return ResourceParameter(name, type_name, ParameterSource.QUERY, **kwargs)


def make_method(
    http_method: str = "GET",
    handler_name: str = "read",
    produces=(),
    consumes=(),
) -> ResourceMethod:
    return ResourceMethod(http_method, handler_name, tuple(produces), tuple(consumes))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def person_metadata():
    return BindingMetadata(
        namespace="http://example.org/rs",
        project_id="example-rs",
        states=("person", "ancestry", "person"),
    )


@pytest.fixture
def person_binding(person_metadata):
    return ResourceBinding(
        declaration="PersonRSDefinition",
        path="/persons/{pid}",
        definition=make_definition(),
        metadata=person_metadata,
    )


@pytest.fixture
def bare_binding():
    return ResourceBinding(None, "/things", make_definition("org.example.rs.ThingRSDefinition"))
