from fastapi import APIRouter, Depends, Request

from plotdesk.core.exceptions import ContentGenerationUnavailable
from plotdesk.core.rate_limiter import ai_operation_rate_limit
from plotdesk.schemas.content import (
    FutureDevelopmentRequest,
    GenerationResult,
    LocationRequest,
    PlotAttributes,
)
from plotdesk.services import PlotService
from plotdesk.services.content_generation import ContentGenerationService
from plotdesk.api.deps import get_content_service, get_plot_service

router = APIRouter()


def _unwrap(result: GenerationResult) -> GenerationResult:
    if result.data is None:
        raise ContentGenerationUnavailable(result.error or ContentGenerationUnavailable().message)
    return result


@router.get("/status")
async def ai_status(ai: ContentGenerationService = Depends(get_content_service)):
    return {"available": ai.available}


@router.post("/description", response_model=GenerationResult)
@ai_operation_rate_limit()
async def generate_description(
    request: Request,
    plot: PlotAttributes,
    ai: ContentGenerationService = Depends(get_content_service)
):
    return _unwrap(await ai.generate_description(plot))


@router.post("/vastu", response_model=GenerationResult)
@ai_operation_rate_limit()
async def analyze_vastu(
    request: Request,
    plot: PlotAttributes,
    ai: ContentGenerationService = Depends(get_content_service)
):
    return _unwrap(await ai.analyze_vastu(plot))


@router.post("/amenities", response_model=GenerationResult)
@ai_operation_rate_limit()
async def nearby_amenities(
    request: Request,
    body: LocationRequest,
    ai: ContentGenerationService = Depends(get_content_service)
):
    return _unwrap(await ai.nearby_amenities(body.location))


@router.post("/site-plan", response_model=GenerationResult)
@ai_operation_rate_limit()
async def generate_site_plan(
    request: Request,
    plot: PlotAttributes,
    ai: ContentGenerationService = Depends(get_content_service)
):
    return _unwrap(await ai.generate_site_plan_image(plot))


@router.post("/future-development", response_model=GenerationResult)
@ai_operation_rate_limit()
async def visualize_future_development(
    request: Request,
    body: FutureDevelopmentRequest,
    ai: ContentGenerationService = Depends(get_content_service)
):
    return _unwrap(await ai.visualize_future_development(body.image_data_url, body.location))


@router.get("/market-insights", response_model=GenerationResult)
async def market_insights(
    ai: ContentGenerationService = Depends(get_content_service),
    plots: PlotService = Depends(get_plot_service)
):
    """Home page teaser; falls back to fixed copy when AI is off"""
    return await ai.market_insights(await plots.get_plots())
