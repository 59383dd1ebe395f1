from fastapi import APIRouter, Depends, status

from eb_course.aws.signups import SignupStore
from eb_course.dependencies import get_signup_store
from eb_course.errors import SignupNotFoundError
from eb_course.schemas import SignupRecord, SignupRequest, normalize_email

router = APIRouter()


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_409_CONFLICT: {"description": "A signup for this email already exists."},
    },
)
def create_signup(
    signup: SignupRequest,
    store: SignupStore = Depends(get_signup_store),
) -> SignupRecord:
    """Store the name and email submitted by the signup form."""
    return store.put_signup(name=signup.name, email=signup.email)


@router.get(
    "/signup/{email}",
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "No signup for this email."},
    },
)
def get_signup(email: str, store: SignupStore = Depends(get_signup_store)) -> SignupRecord:
    try:
        email = normalize_email(email)
    except ValueError as e:
        raise SignupNotFoundError(email) from e
    return store.get_signup(email)
