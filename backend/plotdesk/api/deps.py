"""
Shared request dependencies: per-request services bound to the store,
and the conversion of pipeline results into HTTP responses.
"""
from fastapi import Depends
from fastapi.responses import JSONResponse

from plotdesk.schemas import ActionState
from plotdesk.services import (
    ContactService,
    DashboardService,
    InquiryService,
    PlotService,
    RegistrationService,
    UserService,
    view_cache,
)
from plotdesk.services.content_generation import ContentGenerationService, content_generation_service
from plotdesk.storage import DataStore, get_store


def get_plot_service(store: DataStore = Depends(get_store)) -> PlotService:
    return PlotService(store, view_cache)


def get_user_service(store: DataStore = Depends(get_store)) -> UserService:
    return UserService(store, view_cache)


def get_contact_service(store: DataStore = Depends(get_store)) -> ContactService:
    return ContactService(store, view_cache)


def get_registration_service(store: DataStore = Depends(get_store)) -> RegistrationService:
    return RegistrationService(store, view_cache)


def get_inquiry_service(store: DataStore = Depends(get_store)) -> InquiryService:
    return InquiryService(store, view_cache)


def get_dashboard_service(store: DataStore = Depends(get_store)) -> DashboardService:
    return DashboardService(store, view_cache)


def get_content_service() -> ContentGenerationService:
    return content_generation_service


def action_response(state: ActionState) -> JSONResponse:
    """Mutation result body with the status code the pipeline chose"""
    return JSONResponse(
        status_code=state.status_code,
        content=state.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
