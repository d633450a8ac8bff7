from typing import Optional
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from auth import verify_token

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    """Authenticate gate: the token's claims are trusted as-is until it expires."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access token required")
    payload = verify_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload

def get_optional_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Optional[dict]:
    """Claims when a valid bearer token is present, None otherwise. Never rejects."""
    if credentials is None or not credentials.credentials:
        return None
    return verify_token(credentials.credentials)

def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if not current_user.get("is_admin"):
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user

def require_moderator(current_user: dict = Depends(get_current_user)) -> dict:
    if not current_user.get("is_admin") and not current_user.get("is_moderator"):
        raise HTTPException(status_code=403, detail="Moderator access required")
    return current_user
