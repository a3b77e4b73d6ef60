"""
Form validation helpers shared by the pipelines.

validate_form() runs a pydantic form schema and reports every violation
as a human-readable message keyed by the wire (camelCase) field name.
"""
import base64
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from plotdesk.core.constants import IMAGE_MAX_SIZE, Messages
from plotdesk.schemas.base import FormModel

F = TypeVar("F", bound=FormModel)

FORM_ERROR_KEY = "_form"


@dataclass
class ImageUpload:
    """An uploaded file as received from a multipart form"""
    content: bytes
    content_type: str = ""
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


def validate_form(schema: Type[F], data: Dict[str, Any]) -> Tuple[Optional[F], Dict[str, List[str]]]:
    """
    Validate submitted form data.

    Returns (model, {}) on success or (None, errors) where errors maps each
    failing field to its messages.
    """
    try:
        return schema.model_validate(data), {}
    except PydanticValidationError as e:
        return None, _collect_errors(schema, e)


def _collect_errors(schema: Type[FormModel], error: PydanticValidationError) -> Dict[str, List[str]]:
    by_alias = {(field.alias or name): name for name, field in schema.model_fields.items()}
    errors: Dict[str, List[str]] = {}

    for item in error.errors():
        loc = str(item["loc"][0]) if item["loc"] else FORM_ERROR_KEY
        field_name = by_alias.get(loc, loc)
        field = schema.model_fields.get(field_name)
        key = (field.alias or field_name) if field else loc

        table = schema.error_messages.get(field_name, {})
        message = table.get(item["type"]) or table.get("*") or Messages.INVALID_INPUT

        messages = errors.setdefault(key, [])
        if message not in messages:
            messages.append(message)

    return errors


def validate_image(upload: Optional[ImageUpload]) -> List[str]:
    """
    Check an uploaded plot image.

    Presence is checked first and stops validation; type and size
    problems are both reported.
    """
    if upload is None or upload.size == 0:
        return [Messages.IMAGE_REQUIRED]

    errors = []
    if not (upload.content_type or "").startswith("image/"):
        errors.append(Messages.INVALID_IMAGE)
    if upload.size >= IMAGE_MAX_SIZE:
        errors.append(Messages.IMAGE_TOO_LARGE)
    return errors


def encode_image(upload: ImageUpload) -> str:
    """Self-contained data URL for the image bytes"""
    payload = base64.b64encode(upload.content).decode("ascii")
    return f"data:{upload.content_type};base64,{payload}"


_DIGIT_RUN = re.compile(r"\d+")


def price_per_sqft(price: Optional[float], plot_size: str) -> Optional[int]:
    """
    Price divided by the first run of digits in the size text, rounded half up.

    "40x60 ft" counts as 40. No price, no digits or a zero size give None.
    """
    if not price:
        return None

    match = _DIGIT_RUN.search(plot_size or "")
    if match is None:
        return None

    size = int(match.group())
    if size == 0:
        return None

    return int(math.floor(price / size + 0.5))
