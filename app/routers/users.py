"""
User management endpoints. Superadmin only.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from app.models.user import User
from app.services.user import UserService
from app.schemas.user import UserCreate, UserUpdate, UserResponse, UserListResponse
from app.schemas.error import get_error_responses
from app.utils.dependencies import get_current_superadmin_user, get_user_service
from app.utils.params import MAX_BIGINT, parse_id, parse_optional_int


router = APIRouter(
    prefix="/admin/users",
    tags=["Users"],
    responses=get_error_responses(401, 403)
)


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    request: Request,
    current_user: User = Depends(get_current_superadmin_user),
    user_service: UserService = Depends(get_user_service)
) -> UserListResponse:
    skip = parse_optional_int(request.query_params.get("skip"), minimum=0, maximum=MAX_BIGINT) or 0
    limit = min(parse_optional_int(request.query_params.get("limit"), minimum=1) or 100, 100)

    users, total = await user_service.list_users(skip=skip, limit=limit)
    return UserListResponse(
        users=[UserResponse.model_validate(u.to_dict()) for u in users],
        total=total
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses=get_error_responses(409, 422)
)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(get_current_superadmin_user),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.create_user(user_data)
    return UserResponse.model_validate(user.to_dict())


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    responses=get_error_responses(400, 404, 409, 422)
)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_superadmin_user),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.update_user(parse_id(user_id, "user"), user_data)
    return UserResponse.model_validate(user.to_dict())


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="A superadmin cannot delete their own account",
    responses=get_error_responses(400, 404)
)
async def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_superadmin_user),
    user_service: UserService = Depends(get_user_service)
) -> Response:
    await user_service.delete_user(parse_id(user_id, "user"), current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
