"""Contracts shared between the application and infrastructure layers."""

from .dtos import DesignOutput, DesignParameters, DesignState, GroupExportJob

__all__ = [
    "DesignOutput",
    "DesignParameters",
    "DesignState",
    "GroupExportJob",
]
