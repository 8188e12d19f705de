from pathlib import Path

from portfolio.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("SITE_CONTENT_DIR", "SITE_ENV", "LOG_LEVEL", "FEED_LIMIT", "SITE_TITLE", "BUILD_STAMP"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings == Settings()
    assert settings.feed_limit == 5
    assert settings.strict_content is False
    assert settings.posts_dir == Path("content") / "posts"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SITE_CONTENT_DIR", str(tmp_path))
    monkeypatch.setenv("SITE_ENV", "Development")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("FEED_LIMIT", "3")

    settings = load_settings()

    assert settings.content_dir == tmp_path
    assert settings.strict_content is True
    assert settings.log_level == "DEBUG"
    assert settings.feed_limit == 3
    assert settings.site_file == tmp_path / "site.yaml"
    assert settings.build_stamp is None


def test_invalid_values_fall_back(monkeypatch, caplog):
    monkeypatch.setenv("FEED_LIMIT", "lots")
    monkeypatch.setenv("SITE_ENV", "staging")

    with caplog.at_level("WARNING", logger="portfolio.config"):
        settings = load_settings()

    assert settings.feed_limit == 5
    assert settings.environment == "production"
    assert any("invalid_feed_limit_config" in record.getMessage() for record in caplog.records)


def test_non_positive_feed_limit_falls_back(monkeypatch):
    monkeypatch.setenv("FEED_LIMIT", "0")

    assert load_settings().feed_limit == 5


def test_build_stamp_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("BUILD_STAMP", str(tmp_path / "build.json"))

    assert load_settings().build_stamp == tmp_path / "build.json"
