"""ghr - reconcile a GitHub release onto a tag from CI."""

__version__ = "0.1.0"
