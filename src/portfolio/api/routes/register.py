"""Admin listing endpoint."""

from fastapi import APIRouter

from src.portfolio.api.dependencies import RegisterServiceDep
from src.portfolio.schemas.register import RegisterListResponse, RegisterRead

router = APIRouter(prefix="/register", tags=["register"])


@router.get(
    "",
    response_model=RegisterListResponse,
    summary="List admin accounts",
)
async def list_users(register_service: RegisterServiceDep) -> RegisterListResponse:
    users = await register_service.list_users()
    return RegisterListResponse(
        message="Users fetched successfully",
        users=[RegisterRead.model_validate(u) for u in users],
    )
