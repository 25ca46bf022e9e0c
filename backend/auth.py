from datetime import datetime, timedelta, timezone

from fastapi import Request, HTTPException, status
from jose import jwt, JWTError

from config import JWT_SECRET, JWT_ALGORITHM, JWT_AUDIENCE, JWT_EXPIRY_HOURS


def create_token(user_id: str, data: dict = None) -> str:
    """Create an access token shaped like the ones Supabase Auth issues."""
    to_encode = dict(data or {})
    now = datetime.now(timezone.utc)
    to_encode.update({
        "sub": user_id,
        "aud": JWT_AUDIENCE,
        "role": "authenticated",
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRY_HOURS),
    })
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and verify a JWT token. Returns the payload or None on failure."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
        return payload
    except JWTError:
        return None


def get_bearer_token(request: Request) -> str:
    """Extract the raw bearer token from the Authorization header or raise 401."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_header.split(" ", 1)[1]


async def get_current_user(request: Request) -> str:
    """
    FastAPI dependency — extracts the Bearer token from the Authorization
    header, verifies it, and returns the user id (the token's subject).
    Raises HTTP 401 if the token is missing or invalid.
    """
    token = get_bearer_token(request)
    payload = verify_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token payload missing required claims",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id
