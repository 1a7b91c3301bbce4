from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from joblit.exceptions import InvalidInputError
from joblit.routes.dependencies import get_account_service, get_current_user
from joblit.schema.auth_schema import Token
from joblit.schema.user_schema import RegistrationCandidate, UserAccount
from joblit.services.account_service import AccountService
from joblit.utils.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


# --------------------------
# Registration
# --------------------------
@router.post("/register", status_code=201)
def register(candidate: RegistrationCandidate, accounts: AccountService = Depends(get_account_service)):
    try:
        registered = accounts.register(candidate)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not registered:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration Failed. That username or email might already be taken."
        )
    return {"message": "Registration Successful! You can log in now."}


# --------------------------
# Login
# --------------------------
@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), accounts: AccountService = Depends(get_account_service)):
    user = accounts.authenticate(form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    token = create_access_token({"sub": str(user.id), "type": user.type.value})
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserAccount)
def me(current_user: UserAccount = Depends(get_current_user)):
    return current_user
