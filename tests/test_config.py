import pytest

from wordle_cup.config import Config, ScoringConfig
from wordle_cup.constants import DEFAULT_SCORE_WEIGHTS


def test_default_weights():
    scoring = ScoringConfig()
    assert scoring.weights == {0: 0, 1: 13, 2: 8, 3: 5, 4: 3, 5: 2, 6: 1}
    assert scoring.weight_for(7) == 0
    assert scoring.timezone == 'UTC'


def test_score_weights_from_environment(monkeypatch):
    monkeypatch.setattr(Config, 'SCORE_WEIGHTS', '0, 6, 5, 4, 3, 2, 1')
    assert Config.get_score_weights() == {0: 0, 1: 6, 2: 5, 3: 4, 4: 3, 5: 2, 6: 1}

    monkeypatch.setattr(Config, 'SCORE_WEIGHTS', '')
    assert Config.get_score_weights() == DEFAULT_SCORE_WEIGHTS


@pytest.mark.parametrize("value", ['1,2,3', 'a,b,c,d,e,f,g'])
def test_bad_score_weights(monkeypatch, value):
    monkeypatch.setattr(Config, 'SCORE_WEIGHTS', value)
    with pytest.raises(ValueError):
        Config.get_score_weights()


def test_validate_requires_discord_settings(monkeypatch):
    monkeypatch.setattr(Config, 'DISCORD_TOKEN', 'token')
    monkeypatch.setattr(Config, 'DISCORD_GUILD_ID', 1)
    monkeypatch.setattr(Config, 'WORDLE_CHANNEL_ID', 2)
    monkeypatch.setattr(Config, 'CUP_CHECK_INTERVAL_HOURS', 2)
    monkeypatch.setattr(Config, 'SCORE_WEIGHTS', '')
    Config.validate()

    monkeypatch.setattr(Config, 'WORDLE_CHANNEL_ID', 0)
    with pytest.raises(ValueError):
        Config.validate()

    monkeypatch.setattr(Config, 'WORDLE_CHANNEL_ID', 2)
    monkeypatch.setattr(Config, 'CUP_CHECK_INTERVAL_HOURS', 48)
    with pytest.raises(ValueError):
        Config.validate()


def test_validate_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setattr(Config, 'DISCORD_TOKEN', 'token')
    monkeypatch.setattr(Config, 'DISCORD_GUILD_ID', 1)
    monkeypatch.setattr(Config, 'WORDLE_CHANNEL_ID', 2)
    monkeypatch.setattr(Config, 'CUP_CHECK_INTERVAL_HOURS', 2)
    monkeypatch.setattr(Config, 'SCORE_WEIGHTS', '')

    monkeypatch.setattr(Config, 'LOG_LEVEL', 'debug')
    Config.validate()

    monkeypatch.setattr(Config, 'LOG_LEVEL', 'loud')
    with pytest.raises(ValueError):
        Config.validate()
