from __future__ import annotations


class RoadmapError(Exception):
    """Base class for roadmap errors."""


class RoadmapInputError(RoadmapError, ValueError):
    """The roadmap request is missing a role or skills."""


class CatalogError(RoadmapError):
    """A static data table is missing or malformed."""
