# src/mets_sync/schedule_sync.py
# Season schedule for the tracked team from the MLB Stats API.

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from .http_client import MLB_API_BASE
from .sync_config import SyncConfig

logger = logging.getLogger(__name__)

SCHEDULE_URL = f"{MLB_API_BASE}/schedule"


def fetch_schedule(client, config: SyncConfig) -> list:
    """Returns the date groups (each with a 'games' list) for the configured team and season."""
    params = {
        'sportId': 1,
        'teamId': config.team_id,
        'season': config.season,
        'hydrate': 'team,linescore',
    }
    data = client.get_json(SCHEDULE_URL, params=params)
    return data.get('dates') or []


def format_start_time(game_date: str | None, timezone: str) -> str:
    """Converts the UTC gameDate (e.g. 2026-03-26T20:10:00Z) to a local '07:10 PM' style time."""
    if not game_date:
        return 'TBD'
    try:
        utc_time = datetime.fromisoformat(game_date.replace('Z', '+00:00'))
    except ValueError:
        logger.warning(f"Unparseable gameDate {game_date!r}; storing TBD.")
        return 'TBD'
    return utc_time.astimezone(ZoneInfo(timezone)).strftime('%I:%M %p')


def game_outcome(game: dict, is_home: bool) -> tuple[str, int, int]:
    """
    Returns (result, score_us, score_them). Only final games get a result and scores;
    anything else, live games included, is Pending with 0-0.
    """
    state = (game.get('status') or {}).get('abstractGameState') or ''
    if state.lower() != 'final':
        return 'Pending', 0, 0

    home_score = game['teams']['home'].get('score') or 0
    away_score = game['teams']['away'].get('score') or 0
    score_us, score_them = (home_score, away_score) if is_home else (away_score, home_score)
    return ('W' if score_us > score_them else 'L'), score_us, score_them


def build_game_document(game: dict, date: str, config: SyncConfig) -> tuple[str, dict]:
    """Maps one schedule game to its (key, document) pair."""
    home = game['teams']['home']
    away = game['teams']['away']
    is_home = home['team']['id'] == config.team_id
    opponent = away['team']['name'] if is_home else home['team']['name']
    result, score_us, score_them = game_outcome(game, is_home)

    document = {
        'date': date,
        'opponent': opponent,
        'location': 'Home' if is_home else 'Away',
        'time': format_start_time(game.get('gameDate'), config.timezone),
        'gameType': 'Spring' if game.get('gameType') == 'S' else 'Regular',
        'result': result,
        'scoreUs': score_us,
        'scoreThem': score_them,
        'season': str(config.season),
    }
    return str(game['gamePk']), document


def build_schedule_documents(dates: list, config: SyncConfig) -> dict:
    """Maps every game of every date group. Double-headers keep both games (separate gamePk keys)."""
    documents = {}
    for day in dates:
        for game in day.get('games') or []:
            key, document = build_game_document(game, day['date'], config)
            documents[key] = document
    return documents


def sync_schedule(client, store, config: SyncConfig) -> int:
    """Fetches the season schedule and upserts one document per game."""
    logger.info(f"Fetching {config.season} schedule for team {config.team_id}...")
    dates = fetch_schedule(client, config)
    documents = build_schedule_documents(dates, config)
    written = store.upsert_batch(config.schedule_collection, documents)
    logger.info(f"Updated {written} games across {len(dates)} dates.")
    return written
