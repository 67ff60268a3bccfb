import pytest

from shared.utils import config, content_disposition, sanitize_filename, subtitle_filename


def test_config_env_loading() -> None:
    assert config.get("database_url") in (None, "") or isinstance(config.get("database_url"), str)
    allowed_origins = config.get("allowed_origins")
    assert isinstance(allowed_origins, list)
    assert isinstance(config.get("max_upload_bytes"), int)


def test_get_setting_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    assert config.languages()["ru"] == "Russian"

    monkeypatch.setenv("SUBTITLES_FLAG_LANGUAGES_RU", "Русский")
    assert config.get_setting("languages.ru") == "Русский"
    assert config.languages() == {"en": "English", "ru": "Русский"}


def test_get_setting_dotted_path() -> None:
    original = config.settings
    config.set_settings({"languages": {"en": "English", "de": "German"}})
    try:
        assert config.get_setting("languages.de") == "German"
        assert config.get_setting("languages.fr", "missing") == "missing"
        assert config.languages() == {"en": "English", "de": "German"}
    finally:
        config.set_settings(original)


def test_languages_fall_back_to_defaults() -> None:
    original = config.settings
    config.set_settings({})
    try:
        assert config.languages() == {"en": "English", "ru": "Russian"}
    finally:
        config.set_settings(original)


def test_sanitize_filename() -> None:
    safe = sanitize_filename('bad:file/name?"\r\n')
    assert not any(char in safe for char in ':/?"\r\n')
    assert sanitize_filename("   ") == "subtitles"


def test_subtitle_filename() -> None:
    assert subtitle_filename("Pilot") == "Pilot.srt"
    assert subtitle_filename("") == "subtitles.srt"


def test_content_disposition_ascii() -> None:
    assert content_disposition("Pilot.srt") == 'attachment; filename="Pilot.srt"'


def test_content_disposition_non_ascii() -> None:
    header = content_disposition("Пилот.srt")
    header.encode("latin-1")
    assert 'filename="_____.srt"' in header
    assert "filename*=UTF-8''%D0%9F" in header
