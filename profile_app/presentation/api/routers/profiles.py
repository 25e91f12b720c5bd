"""Routes for registering, viewing and updating a profile."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ....application.rendering import TemplateCache
from ....application.services.profile_service import ProfileService
from ....core.dependencies import get_profile_service, get_templates
from ....domain.exceptions import DuplicateEmailError, NotFoundError, StoreError, ValidationError
from ...api.dependencies import enforce_write_limit, require_update_access

router = APIRouter(tags=["Profiles"])


def _profile_location(user_id: str) -> str:
    return f"/profile?id={user_id}"


@router.post("/register", dependencies=[Depends(enforce_write_limit)])
async def register(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    hobbies: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    profile_service: ProfileService = Depends(get_profile_service),
) -> RedirectResponse:
    try:
        user = profile_service.register(name=name, email=email, hobbies=hobbies, location=location)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists") from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving user"
        ) from exc
    return RedirectResponse(_profile_location(user.id), status_code=status.HTTP_302_FOUND)


@router.get("/profile", response_class=HTMLResponse)
async def profile(
    user_id: Optional[str] = Query(None, alias="id"),
    profile_service: ProfileService = Depends(get_profile_service),
    templates: TemplateCache = Depends(get_templates),
) -> HTMLResponse:
    try:
        user = profile_service.get_profile(user_id)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error"
        ) from exc
    return HTMLResponse(templates.render_profile(user))


@router.post(
    "/update",
    dependencies=[Depends(require_update_access), Depends(enforce_write_limit)],
)
async def update(
    user_id: Optional[str] = Form(None, alias="id"),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    hobbies: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    profile_service: ProfileService = Depends(get_profile_service),
) -> RedirectResponse:
    try:
        updated_id = profile_service.update(
            user_id, name=name, email=email, hobbies=hobbies, location=location
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists") from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating user"
        ) from exc
    return RedirectResponse(_profile_location(updated_id), status_code=status.HTTP_302_FOUND)
