"""
Garden CRM API - Auth Router
Endpoints de autenticación: register, login, refresh
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from garden_crm.config import settings
from garden_crm.database import get_db, unit_of_work
from garden_crm.dependencies import get_current_owner
from garden_crm.models.owner import Owner
from garden_crm.schemas import (
    LoginRequest, RegisterRequest, RefreshRequest, TokenResponse, OwnerResponse
)
from garden_crm.services.auth import (
    verify_password, get_password_hash, create_tokens, owner_id_from, verify_refresh_token
)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_response(owner: Owner) -> TokenResponse:
    access_token, refresh_token = create_tokens(str(owner.id), owner.email)
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Registro de nueva cuenta con email/password
    """
    existing = db.query(Owner).filter(Owner.email == request.email.lower()).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This email is already registered"
        )

    owner = Owner(
        email=request.email.lower(),
        password_hash=get_password_hash(request.password),
        full_name=request.full_name,
        company=request.company,
    )

    with unit_of_work(db):
        db.add(owner)
    db.refresh(owner)

    return _token_response(owner)


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login con email/password
    """
    owner = db.query(Owner).filter(Owner.email == request.email.lower()).first()

    if not owner or not verify_password(request.password, owner.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    with unit_of_work(db):
        owner.last_login_at = datetime.now(timezone.utc)

    return _token_response(owner)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(
    request: RefreshRequest,
    db: Session = Depends(get_db)
):
    """
    Renueva tokens usando refresh token
    """
    owner_id = owner_id_from(verify_refresh_token(request.refresh_token))
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token"
        )

    owner = db.query(Owner).filter(Owner.id == owner_id).first()
    if not owner:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found"
        )

    return _token_response(owner)


@router.get("/me", response_model=OwnerResponse)
def get_me(
    current_owner: Owner = Depends(get_current_owner)
):
    """
    Obtiene datos de la cuenta autenticada
    """
    return current_owner
