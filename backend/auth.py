from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
import os

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "168"))

# Credential size rules (bcrypt truncates after 72 bytes)
USERNAME_MIN_LENGTH = 1
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 10
PASSWORD_MAX_LENGTH = 72
PASSWORD_MAX_BYTES = 72

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRATION_HOURS)
    
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return encoded_jwt

def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        return None

def create_user_token(user_id: str, username: str) -> str:
    """Token identifying a principal: sub is the user id."""
    return create_access_token({"sub": user_id, "username": username})

def check_credential_sizes(username: str, password: str) -> Optional[tuple[str, str]]:
    """Return (field, message) for the first credential outside its size bounds."""
    sized_fields = {
        "username": (username, USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH),
        "password": (password, PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH),
    }
    for field, (value, minimum, _) in sized_fields.items():
        if len(value.strip()) < minimum:
            return field, f"must be at least {minimum} characters long"
    for field, (value, _, maximum) in sized_fields.items():
        if len(value.strip()) > maximum:
            return field, f"must be at most {maximum} characters long"
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return "password", f"must be at most {PASSWORD_MAX_BYTES} bytes long"
    return None
