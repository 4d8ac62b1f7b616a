from __future__ import annotations


class AnalysisError(RuntimeError):
    """An analysis could not be produced."""


class NoVideoTrackError(AnalysisError):
    """The source has no decodable video stream."""
