import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interview_prep.database import get_db
from interview_prep.dependencies import get_current_user
from interview_prep.models.user import User
from interview_prep.schemas.user import (
    AuthResponse,
    ImageUploadResponse,
    ProfileDescriptionUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)
from interview_prep.services.auth import create_access_token, get_password_hash, verify_password
from interview_prep.services.storage import StorageError, get_image_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user with email and password."""
    email = user_data.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already in use",
        )

    user = User(
        full_name=user_data.full_name.strip(),
        email=email,
        hashed_password=get_password_hash(user_data.password),
        profile_image_url=user_data.profile_image_url or None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already in use",
        )
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with email and password."""
    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.warning("Failed login attempt for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return _auth_response(user)


@router.get("/getUser", response_model=UserResponse)
async def get_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user info."""
    return current_user


@router.put("/update-profile-description", response_model=UserResponse)
async def update_profile_description(
    update_data: ProfileDescriptionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Save the free-text profile used to write cover letters."""
    current_user.profile_description = update_data.profile_description.strip()
    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/uploadImage", response_model=ImageUploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    storage=Depends(get_image_storage),
):
    """Store a profile image and return its public URL."""
    if image is None or not image.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    if not image.content_type or not image.content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image uploads are allowed",
        )

    contents = await image.read()
    try:
        image_url = await asyncio.to_thread(
            storage.save, image.filename, contents, image.content_type
        )
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Error uploading image", "error": str(e)},
        )

    return ImageUploadResponse(image_url=image_url)
