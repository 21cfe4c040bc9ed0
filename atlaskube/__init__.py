"""Data models for MongoDB Atlas custom resources, their conditions and statuses."""

__version__ = "0.5.0"
__all__ = ["cluster", "common", "conditions", "project", "status"]