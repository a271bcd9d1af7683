import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.deps import get_auth_context, get_current_user, get_revocation_store, get_token_issuer
from app.errors import DuplicateEmailError, RevocationStoreError
from app.gate import AuthContext
from app.revocation import RevocationStore
from app.tokens import TokenIssuer
from app.auth_module import logic as auth_logic
from app.auth_module import schemas as auth_schemas
from app.schemas.errors import AUTH_RESPONSES, Error400, Error401, Error503, ValidationErrorResponse


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

DUPLICATE_EMAIL = "User already exists with this email"


def _issue(issuer: TokenIssuer, user) -> str:
    return issuer.create_access_token(uid=user.id, role=user.role, data={"email": user.email})


@router.post("/register", status_code=201,
            description="Create a user account and return an access token.",
            summary="Register", response_model=auth_schemas.AuthResponse,
            responses={400: {"model": Error400}},
            operation_id="register_user")
def register(
    payload: auth_schemas.RegisterRequest,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Registers a new user with the ``user`` role. The role cannot be chosen by the client.
    """
    if auth_logic.get_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL)

    try:
        user = auth_logic.create_user(db, name=payload.name, email=payload.email, password=payload.password)
    except DuplicateEmailError:
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL)
    logging.info(f"New user registered: {user.email}")
    return {
        "message": "User registered successfully",
        "data": {"user": user, "token": _issue(issuer, user)},
    }


@router.post("/login", status_code=200,
            description="Authenticate with email and password and retrieve an access token.",
            summary="User Login", response_model=auth_schemas.AuthResponse,
            responses={400: {"model": ValidationErrorResponse}, 401: {"model": Error401}},
            operation_id="login_access_token")
def login(
    payload: auth_schemas.LoginRequest,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = auth_logic.authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    logging.info(f"User logged in: {user.email}")
    return {
        "message": "Login successful",
        "data": {"user": user, "token": _issue(issuer, user)},
    }


@router.post("/logout", status_code=200,
            description="Revokes the presented access token until it would have expired.",
            summary="User Logout", response_model=auth_schemas.MessageResponse,
            responses={**AUTH_RESPONSES, 503: {"model": Error503}},
            operation_id="logout_user")
def logout(
    context: AuthContext = Depends(get_auth_context),
    issuer: TokenIssuer = Depends(get_token_issuer),
    revocations: RevocationStore = Depends(get_revocation_store),
):
    """
    Logs out the current user by adding their token to the revocation store.
    """
    try:
        revocations.revoke(context.token, issuer.remaining_seconds(context.claims))
    except RevocationStoreError:
        raise HTTPException(status_code=503, detail="Logout could not be completed")
    logging.info(f"User logged out: {context.user.email}")
    return {"message": "Logout successful"}


@router.get("/me", status_code=200,
            description="Return the user the access token belongs to.",
            summary="Current user", response_model=auth_schemas.MeResponse,
            responses=AUTH_RESPONSES,
            operation_id="get_me")
def me(current_user=Depends(get_current_user)):
    return {"data": {"user": current_user}}
