"""Model exports.

Import from here: `from src.portfolio.models import Project, Register`
"""

from src.portfolio.models.project import Project
from src.portfolio.models.register import Register

__all__ = [
    "Project",
    "Register",
]
