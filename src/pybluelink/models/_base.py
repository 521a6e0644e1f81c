"""Base model for pybluelink records.

Every record inherits from :class:`BlueLinkBaseModel` which provides:

* ``frozen=True`` so a record is immutable once returned.
* ``alias_generator=to_camel`` so ``model_dump(by_alias=True)`` yields the
  camelCase names a host/bridge layer expects, while attributes stay
  snake_case.
* ``populate_by_name=True`` so records can be built from either form.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BlueLinkBaseModel(BaseModel):
    """Base for immutable pybluelink records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
