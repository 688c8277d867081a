"""Shared fakes for pipeline tests: canned HTTP payloads and an in-memory store."""

import pytest

from mets_sync.store import MemoryStore
from mets_sync.sync_config import SyncConfig


class FakeClient:
    """Stands in for JsonClient, answering each URL with a fixed payload."""

    def __init__(self, responses: dict):
        self.responses = responses
        self.calls = []

    def get_json(self, url, params=None):
        self.calls.append((url, params))
        payload = self.responses[url]
        if isinstance(payload, Exception):
            raise payload
        return payload

    def close(self):
        pass


class FailingStore(MemoryStore):
    def upsert_batch(self, collection, documents):
        raise RuntimeError("commit rejected")


def document_fields(schema: dict) -> set:
    """Field names a pipeline writes for the given schema (the key lives in _id)."""
    return set(schema) - {"_id"}


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(team_id=121, season=2026, hashtag="#LGM", social_limit=25)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


def make_game(
    game_pk=778899,
    home_id=121,
    home_name="New York Mets",
    away_id=144,
    away_name="Atlanta Braves",
    state="Final",
    home_score=5,
    away_score=3,
    game_type="R",
    game_date="2026-07-04T23:10:00Z",
):
    return {
        "gamePk": game_pk,
        "gameDate": game_date,
        "gameType": game_type,
        "status": {"abstractGameState": state},
        "teams": {
            "home": {"team": {"id": home_id, "name": home_name}, "score": home_score},
            "away": {"team": {"id": away_id, "name": away_name}, "score": away_score},
        },
    }


def make_player(person_id=624413, name="Pete Alonso", number="20", position="First Base"):
    return {
        "person": {"id": person_id, "fullName": name},
        "jerseyNumber": number,
        "position": {"name": position, "abbreviation": "1B"},
        "status": {"code": "A", "description": "Active"},
    }


def make_post(key="3kabc123", handle="lgm.bsky.social", display_name="LGM Fan", embed=None):
    post = {
        "uri": f"at://did:plc:xyz/app.bsky.feed.post/{key}",
        "author": {
            "did": "did:plc:xyz",
            "handle": handle,
            "displayName": display_name,
            "avatar": "https://cdn.bsky.app/img/avatar/plain/did:plc:xyz/abc@jpeg",
        },
        "record": {"text": "Let's go Mets! #LGM", "createdAt": "2026-07-04T23:45:00.000Z"},
        "indexedAt": "2026-07-04T23:45:01.000Z",
    }
    if embed is not None:
        post["embed"] = embed
    return post
