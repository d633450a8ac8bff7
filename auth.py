import logging
from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from config import Config

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=Config.BCRYPT_ROUNDS)

SECRET_KEY = Config.JWT_SECRET
ALGORITHM = Config.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = Config.ACCESS_TOKEN_EXPIRE_MINUTES

# Verified against when the login identifier is unknown, so both failure paths cost one bcrypt check
_DUMMY_PASSWORD_HASH = pwd_context.hash("not-a-real-password")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def burn_password_check(plain_password: str) -> None:
    """Run a throwaway verification so a missing account fails as slowly as a wrong password."""
    pwd_context.verify(plain_password, _DUMMY_PASSWORD_HASH)

def token_claims(user: dict) -> dict:
    """Claims carried by a bearer token for the given user row."""
    return {
        "id": user["id"],
        "username": user["username"],
        "is_admin": bool(user["is_admin"]),
        "is_moderator": bool(user["is_moderator"]),
    }

def create_access_token(data: dict, expires_delta: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def decode_access_token(token: str):
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning("Rejected access token: %s", e)
        return None
    if not isinstance(payload.get("id"), int) or not payload.get("username"):
        logger.warning("Rejected access token with incomplete claims")
        return None
    return payload

def verify_token(token: str):
    """Verify and decode JWT token, return payload if valid, None otherwise"""
    return decode_access_token(token)
