"""
icp_wallet.api.routers.users

Backend user store endpoints.

Responsibilities:
- Add or update a user record (principal, raw account id, balance).
- List all stored users.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST

from icp_wallet.api.deps import db_session
from icp_wallet.core.errors import InvalidPrincipal
from icp_wallet.core.principal import Principal
from icp_wallet.db.repositories.users import UserRepo

router = APIRouter(prefix="/v1/users", tags=["users"])


class AddOrUpdateUserRequest(BaseModel):
    principal_id: str = Field(min_length=1, max_length=64)
    # Raw account identifier: 28-byte digest, hex, no checksum prefix.
    account_id: str = Field(pattern=r"^[0-9a-f]{56}$")
    balance_e8s: int = Field(ge=0, le=2**63 - 1)


class AddOrUpdateUserResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    principal_id: str
    account_id: str
    balance_e8s: int


@router.post("", response_model=AddOrUpdateUserResponse)
async def add_or_update_user(
    body: AddOrUpdateUserRequest,
    session: AsyncSession = Depends(db_session),
) -> AddOrUpdateUserResponse:
    try:
        Principal.from_text(body.principal_id)
    except InvalidPrincipal as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e

    message = await UserRepo(session).add_or_update(
        principal_id=body.principal_id,
        account_id=body.account_id,
        balance_e8s=body.balance_e8s,
    )
    await session.commit()
    return AddOrUpdateUserResponse(message=message)


@router.get("", response_model=list[UserResponse])
async def get_all_users(session: AsyncSession = Depends(db_session)) -> list[UserResponse]:
    users = await UserRepo(session).list_all()
    return [
        UserResponse(
            principal_id=u.principal_id,
            account_id=u.account_id,
            balance_e8s=u.balance_e8s,
        )
        for u in users
    ]
