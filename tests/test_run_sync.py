"""Tests for pipeline orchestration and the command-line entry point."""

from unittest import mock

import pytest
import requests

from conftest import FailingStore, FakeClient, make_game, make_player, make_post
from mets_sync import run_sync
from mets_sync.run_sync import main, parse_args, run_pipelines
from mets_sync.schedule_sync import SCHEDULE_URL
from mets_sync.social_sync import SEARCH_URL
from mets_sync.store import StoreError

ROSTER_URL = "https://statsapi.mlb.com/api/v1/teams/121/roster"


def full_responses():
    return {
        SCHEDULE_URL: {"dates": [{"date": "2026-07-04", "games": [make_game()]}]},
        ROSTER_URL: {"roster": [make_player()]},
        SEARCH_URL: {"posts": [make_post()]},
    }


def test_pipelines_run_in_fixed_order(config, store) -> None:
    client = FakeClient(full_responses())

    summary = run_pipelines(client, store, config)

    assert summary == {"schedule": 1, "roster": 1, "social": 1}
    assert [url for url, _ in client.calls] == [SCHEDULE_URL, ROSTER_URL, SEARCH_URL]


def test_schedule_failure_does_not_stop_later_pipelines(config, store) -> None:
    responses = full_responses()
    responses[SCHEDULE_URL] = requests.ConnectionError("statsapi unreachable")

    summary = run_pipelines(FakeClient(responses), store, config)

    assert summary == {"schedule": None, "roster": 1, "social": 1}
    assert "mets_schedule_2026" not in store.collections


def test_failed_commit_is_logged_for_every_pipeline(config) -> None:
    summary = run_pipelines(FakeClient(full_responses()), FailingStore(), config)

    assert summary == {"schedule": None, "roster": None, "social": None}


def test_only_limits_the_pipelines(config, store) -> None:
    client = FakeClient(full_responses())

    summary = run_pipelines(client, store, config, only=["social", "roster"])

    assert list(summary) == ["roster", "social"]


def test_missing_credentials_exit_before_any_request(monkeypatch) -> None:
    monkeypatch.delenv("MONGO_CREDENTIALS", raising=False)
    with mock.patch.object(run_sync, "JsonClient") as client_cls, \
            mock.patch.object(run_sync, "connect_store") as connect:
        status = main([])

    assert status == 1
    client_cls.assert_not_called()
    connect.assert_not_called()


def test_dry_run_completes_without_store(monkeypatch) -> None:
    monkeypatch.delenv("MONGO_CREDENTIALS", raising=False)
    fake = FakeClient(full_responses())
    with mock.patch.object(run_sync, "JsonClient", return_value=fake), \
            mock.patch.object(run_sync, "connect_store") as connect:
        status = main(["--dry-run", "--season", "2026", "--team-id", "121"])

    assert status == 0
    connect.assert_not_called()
    assert len(fake.calls) == 3


def test_store_connection_failure_exits_with_error(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_CREDENTIALS", '{"uri": "mongodb://localhost:1"}')
    with mock.patch.object(run_sync, "JsonClient") as client_cls, \
            mock.patch.object(run_sync, "connect_store", side_effect=StoreError("no servers")):
        status = main([])

    assert status == 1
    client_cls.assert_not_called()


def test_pipeline_failure_still_exits_cleanly(monkeypatch) -> None:
    responses = full_responses()
    responses[SCHEDULE_URL] = requests.HTTPError("502 Server Error")
    fake = FakeClient(responses)
    with mock.patch.object(run_sync, "JsonClient", return_value=fake):
        status = main(["--dry-run", "--season", "2026", "--team-id", "121"])

    assert status == 0
    assert [url for url, _ in fake.calls] == [SCHEDULE_URL, ROSTER_URL, SEARCH_URL]


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--log-level", "LOUD"])

    assert excinfo.value.code == 2


def test_log_level_is_case_insensitive() -> None:
    assert parse_args(["--log-level", "debug"]).log_level == "DEBUG"


def test_log_level_defaults_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert parse_args([]).log_level == "WARNING"


def test_unknown_log_level_from_environment_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(SystemExit) as excinfo:
        parse_args([])

    assert excinfo.value.code == 2
