from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Money stays a Decimal inside the service and is written out as a JSON number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """
    Base model for everything crossing the HTTP boundary.
    The web client speaks camelCase; Python code uses snake_case attribute names.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def to_decimal(value) -> Decimal:
    """Exact Decimal for a money figure; floats go through their shortest repr."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
