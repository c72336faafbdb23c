"""Test factories for generating test data.

    from tests.factories import UserFactory, ProjectFactory
"""

from tests.factories.base import BaseFactory
from tests.factories.project import ProjectFactory
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    "BaseFactory",
    "DEFAULT_TEST_PASSWORD",
    "ProjectFactory",
    "UserFactory",
]
