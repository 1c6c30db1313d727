"""Normalized dataset page returned by the open-data portal."""

from typing import Any

from pydantic import BaseModel, Field


class DatasetPage(BaseModel):
    """The ``result`` part of a datastore_search envelope."""

    total: int
    records: list[dict[str, Any]] = Field(default_factory=list)
