"""User signup, login and identity routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.dependencies import get_current_identity, get_verifier
from eventhub.errors import AuthenticationError, ConflictError, NotFoundError
from eventhub.models.user import User
from eventhub.schemas.user import LoginRequest, SignupRequest, TokenOut, UserOut
from eventhub.security import AccessVerifier, Identity, hash_password, verify_password
from eventhub.services import store

logger = logging.getLogger(__name__)
router = APIRouter()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/signup", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    verifier: AccessVerifier = Depends(get_verifier),
):
    """Create an account and return it with a fresh token."""
    email = _normalize_email(payload.email)
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("User already exists")

    user = User(email=email, password_hash=hash_password(payload.password), role=payload.role)
    db.add(user)
    store.commit(db, "create user")
    db.refresh(user)
    logger.info("Created user %s (%s, %s)", user.id, user.email, user.role.value)
    return TokenOut(user=UserOut.model_validate(user), token=verifier.issue(user))


@router.post("/login", response_model=TokenOut)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    verifier: AccessVerifier = Depends(get_verifier),
):
    """Exchange email and password for a token."""
    user = db.query(User).filter(User.email == _normalize_email(payload.email)).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    logger.info("Login successful for %s", user.email)
    return TokenOut(user=UserOut.model_validate(user), token=verifier.issue(user))


@router.get("/me", response_model=UserOut)
def me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Return the account behind the bearer token."""
    user = db.query(User).filter(User.id == identity.subject).first()
    if not user:
        raise NotFoundError("User not found")
    return user
