"""Pydantic data models for mdpaste."""

from mdpaste.models.config import Config, GraphConfig, ImportConfig
from mdpaste.models.result import PasteResult

__all__ = ["Config", "GraphConfig", "ImportConfig", "PasteResult"]
