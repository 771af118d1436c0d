"""
Shared DTO building blocks

The HTTP wire format is camelCase; Python attributes stay snake_case.
"""

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request/response model exposed over HTTP"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class PaginationMeta(CamelModel):
    """Pagination block of list responses"""

    current_page: int
    total_pages: int
    total_items: int
    per_page: int

    @classmethod
    def build(cls, page: int, per_page: int, total_items: int) -> "PaginationMeta":
        return cls(
            current_page=page,
            total_pages=math.ceil(total_items / per_page) if per_page else 0,
            total_items=total_items,
            per_page=per_page,
        )
