from pydantic import Field, field_validator
from typing import Any, Optional

from plotdesk.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PLOT_NUMBER_MAX_LENGTH,
    PLOT_SIZE_MAX_LENGTH,
    UPLOADED_IMAGE_HINT,
    PlotFacing,
    PlotStatus,
)
from plotdesk.schemas.base import CamelModel, FormModel


class Plot(CamelModel):
    """A stored plot listing"""
    id: str
    plot_number: str
    village_name: str
    area_name: str
    plot_size: str
    plot_facing: PlotFacing
    image_url: str
    image_hint: str = UPLOADED_IMAGE_HINT
    description: Optional[str] = None
    price: Optional[float] = None
    price_per_sqft: Optional[int] = None
    price_negotiable: bool = False
    status: PlotStatus = PlotStatus.AVAILABLE


class PlotForm(FormModel):
    """Text fields submitted with the plot create/edit form"""
    plot_number: str = Field(..., min_length=1, max_length=PLOT_NUMBER_MAX_LENGTH)
    village_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    area_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    plot_size: str = Field(..., min_length=1, max_length=PLOT_SIZE_MAX_LENGTH)
    plot_facing: PlotFacing
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    price_negotiable: bool = False
    status: Optional[PlotStatus] = None

    error_messages = {
        "plot_number": {
            "missing": "Plot number is required.",
            "string_too_short": "Plot number is required.",
            "string_too_long": f"Plot number must be less than {PLOT_NUMBER_MAX_LENGTH} characters.",
            "*": "Please enter a plot number.",
        },
        "village_name": {
            "missing": "Village name is required.",
            "string_too_short": "Village name is required.",
            "string_too_long": f"Village name must be less than {NAME_MAX_LENGTH} characters.",
        },
        "area_name": {
            "missing": "Area name is required.",
            "string_too_short": "Area name is required.",
            "string_too_long": f"Area name must be less than {NAME_MAX_LENGTH} characters.",
        },
        "plot_size": {
            "string_too_long": f"Plot size must be less than {PLOT_SIZE_MAX_LENGTH} characters.",
            "*": "Plot size is required.",
        },
        "plot_facing": {
            "*": "Please select a plot facing direction.",
        },
        "description": {
            "*": f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters.",
        },
        "price": {
            "greater_than_equal": "Price cannot be negative.",
            "*": "Price must be a number.",
        },
        "status": {
            "*": "Please select a valid status.",
        },
    }

    @field_validator('price_negotiable', mode='before')
    @classmethod
    def parse_negotiable(cls, v: Any) -> bool:
        # Checkbox forms submit the string "true"
        return v is True or str(v).lower() == 'true'

