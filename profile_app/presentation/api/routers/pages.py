from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ....application.rendering import TemplateCache
from ....core.dependencies import get_templates

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
async def registration_page(templates: TemplateCache = Depends(get_templates)) -> HTMLResponse:
    return HTMLResponse(templates.register_page)
