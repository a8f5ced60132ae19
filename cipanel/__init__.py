"""State, filtering and key handling for browsing CI pipelines, workflows and jobs."""

__version__ = "0.1.0"