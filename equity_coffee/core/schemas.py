"""
Base request model shared by the feature schemas.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """
    Accepts both camelCase (frontend) and snake_case (column-style) keys.

    Partial-update models list NOT NULL columns in `non_nullable_fields`: such a
    field may be omitted but not sent as an explicit null.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    non_nullable_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.non_nullable_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def changes(self) -> dict[str, Any]:
        # Only fields the client actually sent.
        return self.model_dump(exclude_unset=True)
