# backend/routers/users_router.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.session import get_db
from dependencies.auth import CurrentUser
from models.user_model import User
from schemas.users import RegisterPayload, LoginPayload, LoginResponse, UserOut, MeResponse
from services import auth_service
from services.errors import AuthConfigError, EmailTakenError, InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
me_router = APIRouter(tags=["users"])

# small ORM -> schema mapping helper
def _to_out(u: User) -> UserOut:
    return UserOut(id=u.id, name=u.name, email=u.email)

@router.post("/register", response_model=UserOut, status_code=201)
def register_user(body: RegisterPayload, db: Session = Depends(get_db)):
    try:
        u = auth_service.register(db, name=body.name, email=body.email, password=body.password)
    except EmailTakenError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _to_out(u)

@router.post("/login", response_model=LoginResponse)
def login(body: LoginPayload, db: Session = Depends(get_db)):
    try:
        token, u = auth_service.login(db, email=body.email, password=body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except AuthConfigError:
        raise HTTPException(status_code=500, detail="Authentication is not configured")
    return LoginResponse(token=token, user=_to_out(u))

@me_router.get("/me", response_model=MeResponse)
def me(current_user: CurrentUser):
    return MeResponse(userId=current_user.id)
