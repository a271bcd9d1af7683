from typing import Callable, Optional
from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import AuthError, Forbidden
from app.gate import AuthContext, authenticate, authorize
from app.revocation import RevocationStore
from app.tokens import TokenIssuer
from app.auth_module import logic as auth_logic

def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer

def get_revocation_store(request: Request) -> RevocationStore:
    return request.app.state.revocation_store

def to_http_exception(error: AuthError) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if error.status_code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=error.status_code, detail=error.detail, headers=headers)

def get_auth_context(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    revocations: RevocationStore = Depends(get_revocation_store),
) -> AuthContext:
    try:
        return authenticate(
            authorization,
            issuer=issuer,
            revocations=revocations,
            load_identity=lambda user_id: auth_logic.get_user(db, user_id),
        )
    except AuthError as e:
        raise to_http_exception(e)

def get_current_user(context: AuthContext = Depends(get_auth_context)):
    return context.user

def require_roles(*roles: str) -> Callable:
    def dependency(context: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if not authorize(context.user, roles):
            raise to_http_exception(Forbidden("Not authorized to access this route"))
        return context
    return dependency
