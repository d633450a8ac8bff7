import logging
import sqlite3
from fastapi import APIRouter, HTTPException, Depends
from schemas.auth import RegisterRequest, LoginRequest, AuthResponse
from schemas.users import UserResponse
from database import get_db
from auth import hash_password, verify_password, burn_password_check, create_access_token, token_claims
from utils.route_helpers import user_row_to_dict, is_ban_active, get_user_by_id
from utils.security import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest):
    username = payload.username.lower()
    email = payload.email.lower()
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT username, email FROM users WHERE username = ? OR email = ?", (username, email))
        existing = cursor.fetchall()
        if any(row["username"] == username for row in existing):
            logger.warning("Registration rejected, username taken: %s", username)
            raise HTTPException(status_code=400, detail="Username already exists")
        if any(row["email"] == email for row in existing):
            logger.warning("Registration rejected, email taken: %s", email)
            raise HTTPException(status_code=400, detail="Email already exists")

        hashed = hash_password(payload.password)
        try:
            cursor.execute(
                "INSERT INTO users (display_name, username, email, password_hash) VALUES (?, ?, ?, ?)",
                (payload.display_name, username, email, hashed)
            )
            conn.commit()
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration for the same username or email
            logger.warning("Registration insert hit unique constraint for %s / %s", username, email)
            raise HTTPException(status_code=400, detail="Username or email already exists")
        cursor.execute("SELECT * FROM users WHERE id = ?", (cursor.lastrowid,))
        user = cursor.fetchone()

    logger.info("Registered user %s (id=%s)", user["username"], user["id"])
    return {
        "user": user_row_to_dict(user),
        "token": create_access_token(token_claims(user)),
        "message": "User created successfully",
    }

@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest):
    identifier = payload.identifier.lower()
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM users WHERE username = ? OR email = ?", (identifier, identifier))
        user = cursor.fetchone()

    if user is None:
        burn_password_check(payload.password)
        logger.warning("Failed login for unknown identifier %s", identifier)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_password(payload.password, user["password_hash"]):
        logger.warning("Failed login for user %s", user["username"])
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if is_ban_active(user):
        logger.warning("Banned user %s attempted login", user["username"])
        raise HTTPException(status_code=403, detail={
            "error": "Account is banned",
            "banned_until": user["banned_until"],
        })

    logger.info("User %s logged in", user["username"])
    return {
        "user": user_row_to_dict(user),
        "token": create_access_token(token_claims(user)),
        "message": "Login successful",
    }

@router.get("/me", response_model=UserResponse)
def get_me(current_user: dict = Depends(get_current_user)):
    """Current user record for the bearer token."""
    user = get_user_by_id(current_user["id"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
