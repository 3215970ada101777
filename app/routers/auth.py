from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_db
from app.core.errors import storefront_errors
from app.schemas import LoginRequest, LoginResponse, RegisterRequest, UserRead
from app.services import AuthService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    with storefront_errors("register user"):
        user = AuthService(db).register(username=payload.username, password=payload.password)
        return UserRead.from_orm(user)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    service = AuthService(db)
    with storefront_errors("log in"):
        user = service.authenticate(username=payload.username, password=payload.password)
        return LoginResponse(token=service.issue_token(user), user=UserRead.from_orm(user))
