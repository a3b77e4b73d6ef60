from pydantic import Field
from typing import Dict, List, Optional

from plotdesk.core.exceptions import PlotDeskError, ValidationError
from plotdesk.schemas.base import CamelModel
from plotdesk.schemas.registration import Registration


class ActionState(CamelModel):
    """
    Result of a mutation pipeline.

    Failures carry a top-level message, plus field-keyed messages for
    validation errors. `code` names the failure kind and `status_code`
    is the HTTP status the API layer answers with.
    """
    success: bool
    message: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None
    code: Optional[str] = None
    plot_id: Optional[str] = None
    id: Optional[str] = None
    registration: Optional[Registration] = None
    token: Optional[str] = None
    count: Optional[int] = None
    status_code: int = Field(200, exclude=True)

    @classmethod
    def ok(cls, message: str, status_code: int = 200, **kwargs) -> "ActionState":
        return cls(success=True, message=message, status_code=status_code, **kwargs)

    @classmethod
    def from_error(cls, error: PlotDeskError) -> "ActionState":
        errors = error.errors if isinstance(error, ValidationError) and error.errors else None
        return cls(
            success=False,
            message=error.message,
            errors=errors,
            code=error.code,
            status_code=error.status_code,
        )


class DashboardSummary(CamelModel):
    plots: int
    users: int
    contacts: int
    inquiries: int
    registrations: int
    new_registrations: int
