from src.portfolio.services.project_service import ProjectService
from src.portfolio.services.register_service import RegisterService

__all__ = ["ProjectService", "RegisterService"]
