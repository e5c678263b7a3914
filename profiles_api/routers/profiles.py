from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from profiles_api.core.errors import (
    ConstraintViolationError,
    DuplicateRelationshipError,
    InvalidProfileError,
    NotFoundError,
    ProfileError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from profiles_api.core.security import TokenVerifier, bearer_token
from profiles_api.domain.profiles import ProfileView
from profiles_api.repositories.profile_repository import ProfileRepository
from profiles_api.schemas.profile import ProfileCreate, ProfileRead, ShortProfileRead
from profiles_api.services.query_service import QueryService
from profiles_api.services.relationship_service import RelationshipService

router = APIRouter(prefix="/api/profiles", tags=["profiles"])

_STATUS_BY_ERROR = (
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidProfileError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateRelationshipError, status.HTTP_409_CONFLICT),
    (ConstraintViolationError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _http_error(exc: ProfileError) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
            return HTTPException(code, exc.message, headers=headers)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


def _state(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} is not configured")
    return value


def get_query_service(request: Request) -> QueryService:
    return _state(request, "query_service")


def get_relationship_service(request: Request) -> RelationshipService:
    return _state(request, "relationship_service")


def get_profile_repository(request: Request) -> ProfileRepository:
    return _state(request, "profile_repository")


def current_user_id(request: Request) -> int:
    """Subject user id of the bearer token on the request."""
    verifier: TokenVerifier = _state(request, "token_verifier")
    try:
        return verifier.verify(bearer_token(request.headers.get("Authorization")))
    except UnauthenticatedError as exc:
        raise _http_error(exc) from exc


@router.get("/me", response_model=ProfileRead)
def get_my_profile(
    user_id: int = Depends(current_user_id),
    queries: QueryService = Depends(get_query_service),
):
    try:
        view = queries.get_own_profile(user_id)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return ProfileRead.from_view(view)


@router.get("", response_model=list[ShortProfileRead])
def search_profiles(
    search: str = "",
    user_id: int = Depends(current_user_id),
    queries: QueryService = Depends(get_query_service),
):
    if not search:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "No pattern")
    try:
        found = queries.search_profiles(search)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return [ShortProfileRead.from_domain(item) for item in found]


@router.post("/crprofile", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreate,
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    try:
        record = profiles.create_profile(payload.to_domain())
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return ProfileRead.from_view(ProfileView(profile=record, is_own_profile=False, is_followed=False))


@router.post("/subscribe/{username}")
def subscribe(
    username: str,
    user_id: int = Depends(current_user_id),
    relationships: RelationshipService = Depends(get_relationship_service),
):
    try:
        relationships.subscribe(user_id, username)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return {"ok": True}


@router.post("/unsubscribe/{username}")
def unsubscribe(
    username: str,
    user_id: int = Depends(current_user_id),
    relationships: RelationshipService = Depends(get_relationship_service),
):
    try:
        relationships.unsubscribe(user_id, username)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return {"ok": True}


@router.get("/followers/{username}", response_model=list[ShortProfileRead])
def get_followers(
    username: str,
    user_id: int = Depends(current_user_id),
    queries: QueryService = Depends(get_query_service),
):
    try:
        followers = queries.get_followers(username)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return [ShortProfileRead.from_domain(item) for item in followers]


@router.get("/followed/{username}", response_model=list[ShortProfileRead])
def get_followees(
    username: str,
    user_id: int = Depends(current_user_id),
    queries: QueryService = Depends(get_query_service),
):
    try:
        followees = queries.get_followees(username)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return [ShortProfileRead.from_domain(item) for item in followees]


@router.get("/{username}", response_model=ProfileRead)
def get_profile(
    username: str,
    user_id: int = Depends(current_user_id),
    queries: QueryService = Depends(get_query_service),
):
    try:
        view = queries.get_profile(user_id, username)
    except ProfileError as exc:
        raise _http_error(exc) from exc
    return ProfileRead.from_view(view)
