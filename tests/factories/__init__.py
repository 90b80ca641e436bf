"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, RegisterFactory
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import ProjectFactory
from tests.factories.register import DEFAULT_TEST_PASSWORD, RegisterFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Project
    "ProjectFactory",
    # Register
    "RegisterFactory",
    "DEFAULT_TEST_PASSWORD",
]
