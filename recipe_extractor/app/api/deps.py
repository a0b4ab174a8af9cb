from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.db.session import get_db
from recipe_extractor.app.schemas.auth import CurrentUser
from recipe_extractor.app.services.pipeline.orchestrator import PipelineOrchestrator, get_orchestrator

security = HTTPBearer(auto_error=False)


def _invalid_token() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """Decode the bearer token when one is sent; anonymous callers get None.

    With AUTH_REQUIRED set, a missing token is rejected as well.
    """
    settings = get_settings()
    if credentials is None:
        if settings.auth_required:
            raise _invalid_token()
        return None
    try:
        payload = jwt.decode(credentials.credentials, settings.auth_secret_key, algorithms=[settings.auth_algorithm])
    except JWTError:
        raise _invalid_token()
    sub = payload.get("sub")
    if sub is None:
        raise _invalid_token()
    return CurrentUser(id=str(sub), email=payload.get("email"))


def get_db_session(db: Session = Depends(get_db)) -> Session:
    return db


def get_pipeline() -> PipelineOrchestrator:
    return get_orchestrator()
