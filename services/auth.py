from datetime import UTC, datetime, timedelta

import bcrypt
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.database.user import User as DBUser
from shared.utils import config, setup_logging

logger = setup_logging("auth")

ALGORITHM = "HS256"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")


class User(BaseModel):
    id: int
    username: str
    disabled: bool = False


class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    email: str | None = Field(None, max_length=255)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_user(db: Session, username: str) -> DBUser | None:
    """Get user from database by username."""
    return db.query(DBUser).filter(DBUser.username == username).first()


def authenticate_user(db: Session, username: str, password: str) -> DBUser | bool:
    """Authenticate user credentials."""
    user = get_user(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return False
    return user


def create_access_token(data: dict[str, str]) -> str:
    """Create JWT access token."""
    expires = datetime.now(UTC) + timedelta(minutes=config.get("access_token_expire_minutes", 1440))
    payload = {**data, "exp": expires}
    return jwt.encode(payload, config.get("secret_key"), algorithm=ALGORITHM)


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> DBUser:
    """Resolve the bearer token into the stored user."""
    try:
        payload = jwt.decode(token, config.get("secret_key"), algorithms=[ALGORITHM])
        username = payload.get("sub")
        if not isinstance(username, str):
            raise HTTPException(status_code=401, detail="Invalid token")
    except JWTError as e:
        raise HTTPException(status_code=401, detail="Invalid token") from e
    user = get_user(db, username)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    if user.disabled:
        raise HTTPException(status_code=403, detail="User account is disabled")
    return user


router = APIRouter()


@router.post(
    "/token",
    tags=["Authentication"],
    summary="User Login",
    description="Authenticate user credentials and receive JWT access token",
    response_description="JWT access token for API authentication",
    responses={
        400: {
            "description": "Invalid credentials provided",
            "content": {
                "application/json": {"example": {"detail": "Incorrect username or password"}}
            },
        },
    },
)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Authenticate user and return JWT access token."""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=400, detail="Incorrect username or password")
    token = create_access_token({"sub": user.username})
    return {"access_token": token, "token_type": "bearer"}


@router.post(
    "/token-json",
    tags=["Authentication"],
    summary="User Login (JSON)",
    description="Authenticate user credentials via JSON and receive JWT access token",
)
async def login_json(login_request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate user and return JWT access token via JSON."""
    user = authenticate_user(db, login_request.username, login_request.password)
    if not user:
        raise HTTPException(status_code=400, detail="Incorrect username or password")
    token = create_access_token({"sub": user.username})
    return {"access_token": token, "token_type": "bearer"}


@router.post("/register", status_code=201, tags=["Authentication"], summary="Register User")
async def register(register_data: RegisterRequest, db: Session = Depends(get_db)):
    """Create a user account and return an access token for it."""
    if get_user(db, register_data.username):
        raise HTTPException(status_code=400, detail="Username already registered")

    user = DBUser(
        username=register_data.username,
        email=register_data.email,
        hashed_password=hash_password(register_data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username or email already registered") from e

    logger.info(f"Registered user {user.username}")
    token = create_access_token({"sub": user.username})
    return {"access_token": token, "token_type": "bearer"}


@router.get(
    "/users/me",
    response_model=User,
    tags=["Authentication"],
    summary="Get Current User",
    description="Retrieve current authenticated user information",
)
async def read_users_me(user: DBUser = Depends(get_current_user)):
    """Get current authenticated user profile."""
    return User(id=user.id, username=user.username, disabled=bool(user.disabled))
