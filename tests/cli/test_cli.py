"""Tests for the strava-rewriter command line."""

import pytest
from typer.testing import CliRunner

import cli.cli as cli_module
from cli.cli import app
from strava_rewriter.config.settings import settings
from strava_rewriter.integrations.strava.errors import DecodeError
from strava_rewriter.integrations.strava.schemas import Athlete
from strava_rewriter.rewrite.types import PageErrorPolicy

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_cli(monkeypatch):
    # setup_logger() would drop the test's loguru sinks
    monkeypatch.setattr(cli_module, "_setup_logging", lambda debug=False: None)
    monkeypatch.setattr(settings, "strava_access_token", "")


@pytest.fixture
def fake_client(monkeypatch, fake_strava_client, make_activity):
    client = fake_strava_client(
        [[make_activity(1, "Утренний забег"), make_activity(2, "Evening Run"), make_activity(3, "Ночная ходьба")]]
    )
    configs = []

    def build(config):
        configs.append(config)
        return client

    monkeypatch.setattr(cli_module, "_build_client", build)
    client.configs = configs
    return client


def test_missing_access_token_prints_usage(fake_client):
    result = runner.invoke(app, ["-from", "2022-01-01", "-to", "2022-02-01"])

    assert result.exit_code == 2
    assert "Access token is required" in result.output
    assert fake_client.configs == []


def test_access_token_falls_back_to_settings(monkeypatch, fake_client):
    monkeypatch.setattr(settings, "strava_access_token", "from-env")

    result = runner.invoke(app, ["-from", "2022-01-01", "-to", "2022-02-01"])

    assert result.exit_code == 0
    assert fake_client.configs[0].access_token == "from-env"


def test_inverted_dates_exit_with_usage(fake_client):
    result = runner.invoke(app, ["-accessToken", "t", "-from", "2022-02-01", "-to", "2022-01-01"])

    assert result.exit_code == 2
    assert fake_client.configs == []


def test_malformed_date_is_rejected(fake_client):
    result = runner.invoke(app, ["-accessToken", "t", "-from", "01/02/2022"])

    assert result.exit_code == 2
    assert fake_client.configs == []


def test_rewrites_translatable_activities(fake_client):
    result = runner.invoke(app, ["-accessToken", "t", "-from", "2022-01-01", "-to", "2022-02-01"])

    assert result.exit_code == 0, result.output
    assert fake_client.updated == [(1, "Morning Run"), (3, "Night Walk")]
    assert fake_client.closed is True
    assert "Renamed: 2" in result.output

    config = fake_client.configs[0]
    assert config.access_token == "t"
    assert config.since.isoformat() == "2022-01-01T00:00:00+00:00"
    assert config.until.isoformat() == "2022-02-01T00:00:00+00:00"
    assert config.debug is False


def test_long_option_names_work_too(fake_client):
    result = runner.invoke(
        app,
        ["--access-token", "t", "--from", "2022-01-01", "--to", "2022-02-01", "--debug", "--on-page-error", "abort"],
    )

    assert result.exit_code == 0, result.output
    config = fake_client.configs[0]
    assert config.debug is True
    assert config.on_page_error is PageErrorPolicy.ABORT


def test_dates_default_to_whole_history(fake_client):
    result = runner.invoke(app, ["-accessToken", "t"])

    assert result.exit_code == 0, result.output
    config = fake_client.configs[0]
    assert config.since.year == 1970
    assert config.until > config.since


def test_dry_run_does_not_update(fake_client):
    result = runner.invoke(app, ["-accessToken", "t", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert fake_client.updated == []
    assert "Would rename: 2" in result.output


def test_update_failure_exits_non_zero(fake_client):
    fake_client.fail_updates = {3}

    result = runner.invoke(app, ["-accessToken", "t"])

    assert result.exit_code == 1
    assert fake_client.updated == [(1, "Morning Run")]


def test_page_failure_with_abort_policy_exits_non_zero(fake_client):
    fake_client.fail_pages = {1}

    result = runner.invoke(app, ["-accessToken", "t", "--on-page-error", "abort"])

    assert result.exit_code == 1
    assert fake_client.updated == []


def test_page_failure_with_stop_policy_finishes(fake_client):
    fake_client.fail_pages = {1}

    result = runner.invoke(app, ["-accessToken", "t", "--on-page-error", "stop"])

    assert result.exit_code == 0, result.output
    assert "Activities fetched: 0" in result.output


def test_error_text_with_brackets_is_printed_verbatim(monkeypatch, fake_client):
    async def broken_athlete(*, timeout=None):
        raise DecodeError("bad json [type=json_invalid] [/oops', input_type=bytes]")

    monkeypatch.setattr(fake_client, "get_athlete", broken_athlete)

    result = runner.invoke(app, ["-accessToken", "t"])

    assert result.exit_code == 1
    assert "bad json [type=json_invalid] [/oops', input_type=bytes]" in result.output


def test_athlete_name_with_brackets_is_printed_verbatim(fake_client):
    fake_client.athlete = Athlete(id=7, first_name="[bold]Ivan", last_name="[/x]")

    result = runner.invoke(app, ["-accessToken", "t"])

    assert result.exit_code == 0, result.output
    assert "[bold]Ivan [/x]" in result.output
