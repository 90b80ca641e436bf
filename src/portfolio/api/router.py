from fastapi import APIRouter

from src.portfolio.api.routes import projects, register

api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router)
api_router.include_router(register.router)
