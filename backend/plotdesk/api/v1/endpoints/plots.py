from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from starlette.datastructures import UploadFile
from typing import Any, Dict, List, Optional, Tuple

from plotdesk.core.exceptions import PlotNotFoundError
from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import AuthUser, Plot
from plotdesk.services import PlotService
from plotdesk.services.plot_service import IMAGE_FIELD
from plotdesk.services.validation import ImageUpload
from plotdesk.api.deps import action_response, get_plot_service

router = APIRouter()


async def read_plot_form(request: Request) -> Tuple[Dict[str, Any], Optional[ImageUpload]]:
    """Split a multipart plot form into text fields and the image upload"""
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Plot forms must be submitted as multipart/form-data"
        )

    form = await request.form()
    fields: Dict[str, Any] = {}
    image: Optional[ImageUpload] = None

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == IMAGE_FIELD:
                image = ImageUpload(
                    content=await value.read(),
                    content_type=value.content_type or "",
                    filename=value.filename or "",
                )
        elif key != IMAGE_FIELD:
            fields[key] = value

    return fields, image


@router.get("", response_model=List[Plot], response_model_exclude_none=True)
async def list_plots(
    q: Optional[str] = Query(None, description="Matches area, village or plot number"),
    facing: Optional[str] = Query(None, description='Plot facing, "All" for any'),
    status_filter: Optional[str] = Query(None, alias="status"),
    plots: PlotService = Depends(get_plot_service)
):
    """Browse and search plot listings, newest first"""
    return await plots.search_plots(q, facing, status_filter)


@router.get("/{plot_id}", response_model=Plot, response_model_exclude_none=True)
async def get_plot(
    plot_id: str,
    plots: PlotService = Depends(get_plot_service)
):
    plot = await plots.get_plot(plot_id)
    if plot is None:
        raise PlotNotFoundError(plot_id)
    return plot


@router.post("", status_code=201)
async def create_plot(
    request: Request,
    current_user: AuthUser = Depends(require_owner),
    plots: PlotService = Depends(get_plot_service)
):
    """Create a plot from the multipart form (image field `imageUrl`)"""
    fields, image = await read_plot_form(request)
    return action_response(await plots.create_plot(fields, image))


@router.put("/{plot_id}")
async def update_plot(
    plot_id: str,
    request: Request,
    current_user: AuthUser = Depends(require_owner),
    plots: PlotService = Depends(get_plot_service)
):
    """Edit a plot; leave `imageUrl` empty to keep the current image"""
    fields, image = await read_plot_form(request)
    return action_response(await plots.update_plot(plot_id, fields, image))


@router.delete("/{plot_id}")
async def delete_plot(
    plot_id: str,
    current_user: AuthUser = Depends(require_owner),
    plots: PlotService = Depends(get_plot_service)
):
    return action_response(await plots.delete_plot(plot_id))
