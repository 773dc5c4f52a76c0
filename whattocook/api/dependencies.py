"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from whattocook.database import get_db
from whattocook.models.user import Admin, User
from whattocook.services.auth import ADMIN_SCOPE, decode_access_token
from whattocook.services.chat_service import ChatService
from whattocook.services.llm import LLMService
from whattocook.services.recipe_service import RecipeService

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(token: str, db: Session) -> User | None:
    payload = decode_access_token(token)
    # Admin tokens are not user tokens
    if payload is None or payload.get("scope") == ADMIN_SCOPE:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return db.query(User).filter(User.id == int(user_id)).first()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    user = _resolve_user(credentials.credentials, db)
    if user is None:
        raise _unauthorized()
    return user


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
    db: Annotated[Session, Depends(get_db)],
) -> User | None:
    """Get the current user if a valid bearer token was sent, else None."""
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials, db)


def get_current_admin(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Admin:
    """Get the current back office account from an admin-scoped JWT."""
    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("scope") != ADMIN_SCOPE:
        raise _unauthorized("Unauthorized")

    admin_id = payload.get("sub")
    admin = db.query(Admin).filter(Admin.id == int(admin_id)).first() if admin_id else None
    if admin is None:
        raise _unauthorized("Unauthorized")
    return admin


def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    return LLMService()


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_chat_service(
    db: Annotated[Session, Depends(get_db)],
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
) -> ChatService:
    """Get chat service with dependencies."""
    return ChatService(db, llm_service)
