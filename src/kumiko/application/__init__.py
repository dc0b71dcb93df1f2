"""Application layer - use cases and design file handling."""

from .commands import AnalyzeDesignCommand, NormalizeDesignCommand

__all__ = [
    "AnalyzeDesignCommand",
    "NormalizeDesignCommand",
]
