from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, ClassVar, Dict
from email_validator import EmailNotValidError, validate_email


class CamelModel(BaseModel):
    """Records and request bodies use camelCase on the wire and in data files"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FormModel(CamelModel):
    """
    Base for submitted forms.

    Blank values are treated as absent, and error_messages maps
    field name -> pydantic error type -> message shown to the user
    ("*" is the fallback for any other error type on that field).
    """

    error_messages: ClassVar[Dict[str, Dict[str, str]]] = {}

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode='before')
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data


class EmailFormModel(FormModel):
    """Form with an `email` field checked for address syntax"""

    @field_validator('email', check_fields=False)
    @classmethod
    def check_email_syntax(cls, v: str) -> str:
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v
