"""Data models shared by services and routes."""

from app.models.base import iso_timestamp, utcnow
from app.models.dataset import DatasetPage

__all__ = [
    "DatasetPage",
    "iso_timestamp",
    "utcnow",
]
