# src/mets_sync/roster_sync.py
import logging

from .http_client import MLB_API_BASE
from .sync_config import SyncConfig

logger = logging.getLogger(__name__)


def fetch_roster(client, config: SyncConfig) -> list:
    """Returns the current roster entries for the configured team."""
    data = client.get_json(f"{MLB_API_BASE}/teams/{config.team_id}/roster")
    return data.get('roster') or []


def build_player_document(entry: dict, config: SyncConfig) -> tuple[str, dict]:
    # The API's roster tiers are not fetched; every player gets the configured label.
    person = entry['person']
    document = {
        'name': person['fullName'],
        'number': entry.get('jerseyNumber'),
        'position': entry['position']['name'],
        'mlbId': person['id'],
        'status': config.roster_status,
    }
    return str(person['id']), document


def sync_roster(client, store, config: SyncConfig) -> int:
    """Upserts one document per rostered player. Departed players are left in place."""
    logger.info(f"Fetching roster for team {config.team_id}...")
    roster = fetch_roster(client, config)
    documents = dict(build_player_document(entry, config) for entry in roster)
    written = store.upsert_batch(config.roster_collection, documents)
    logger.info(f"Updated {written} players.")
    return written
