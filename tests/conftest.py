"""Shared fixtures for paramtree tests."""

import pytest

from paramtree.builder import SchemaBuilder
from paramtree.types import build_default_types
from paramtree.validators import build_default_validators


@pytest.fixture
def types():
    """Private type registry, safe to register into."""
    return build_default_types()


@pytest.fixture
def validators():
    """Private validator registry, safe to register into."""
    return build_default_validators()


@pytest.fixture
def builder(types, validators):
    return SchemaBuilder(types, validators)


@pytest.fixture
def contact_schema(builder):
    """name/age/email/phone schema with an exclusive email/phone pair."""
    builder.requires("name")
    builder.optional("age", type=int, default=0)
    builder.optional("email")
    builder.optional("phone")
    builder.mutually_exclusive(["email", "phone"])
    return builder.build()
