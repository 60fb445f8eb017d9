# /examcell/models/common.py

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

# A required string that may not be empty or whitespace-only.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """
    Base for every API model. Fields are snake_case in Python (matching the
    ORM columns, so `model_validate(orm_obj)` works) and camelCase on the
    wire (`studentId`, `recordsProcessed`, `createdAt`).
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
