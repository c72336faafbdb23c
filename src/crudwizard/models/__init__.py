"""Model exports.

Import from here: `from src.crudwizard.models import User, Project`
"""

from src.crudwizard.models.auth import AuthToken
from src.crudwizard.models.project import Project
from src.crudwizard.models.user import User

# Order matters: tables are migrated in this order and later ones reference earlier ones
MIGRATED_MODELS = (User, Project, AuthToken)

__all__ = [
    "AuthToken",
    "MIGRATED_MODELS",
    "Project",
    "User",
]
