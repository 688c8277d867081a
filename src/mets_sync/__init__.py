"""
Schedule, roster and social-post sync for the Mets site.

Each pipeline fetches one JSON feed, maps it to the site's document shape and
upserts the result into MongoDB keyed by the upstream identifier.
"""

from .run_sync import run_pipelines
from .sync_config import SyncConfig

__all__ = ["SyncConfig", "run_pipelines"]
