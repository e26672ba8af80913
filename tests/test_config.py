import pytest

from library_helpers.config import AppConfig, load_dotenv, load_settings_file

ENV_KEYS = [
    "LIBRARY_HELPERS_SORT_CHAR",
    "LIBRARY_HELPERS_STRICT",
    "LIBRARY_HELPERS_LOG_LEVEL",
    "LIBRARY_HELPERS_ISBN_COLUMN",
    "LIBRARY_HELPERS_CALLNUMBER_COLUMN",
    "ENV_PATH",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    cfg = AppConfig.from_env()
    assert cfg.sort_char == " "
    assert cfg.strict is False
    assert cfg.isbn_column == "isbn"
    cfg.validate()


def test_env_then_settings_override(monkeypatch) -> None:
    monkeypatch.setenv("LIBRARY_HELPERS_SORT_CHAR", "~")
    monkeypatch.setenv("LIBRARY_HELPERS_STRICT", "yes")
    monkeypatch.setenv("LIBRARY_HELPERS_ISBN_COLUMN", "ISBN")
    cfg = AppConfig.from_env({"isbn_column": "isbn_13", "unknown": 1})
    assert cfg.sort_char == "~"
    assert cfg.strict is True
    assert cfg.isbn_column == "isbn_13"


def test_validate_rejects_bad_values() -> None:
    with pytest.raises(SystemExit):
        AppConfig(sort_char="ab").validate()
    with pytest.raises(SystemExit):
        AppConfig(log_level="loud").validate()
    with pytest.raises(SystemExit):
        AppConfig(strict="maybe").validate()


def test_load_dotenv_does_not_override(monkeypatch, tmp_path) -> None:
    env = tmp_path / "custom.env"
    env.write_text(
        "# comment\n"
        "LIBRARY_HELPERS_SORT_CHAR='~'  # high sort\n"
        "LIBRARY_HELPERS_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("LIBRARY_HELPERS_SORT_CHAR", "unset")
    monkeypatch.delenv("LIBRARY_HELPERS_SORT_CHAR")
    monkeypatch.setenv("LIBRARY_HELPERS_LOG_LEVEL", "warning")
    used = load_dotenv(str(env))
    assert used == str(env.resolve())
    cfg = AppConfig.from_env()
    assert cfg.sort_char == "~"
    assert cfg.log_level == "warning"


def test_load_settings_file(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("sort_char: '~'\nstrict: true\n", encoding="utf-8")
    assert load_settings_file(str(path)) == {"sort_char": "~", "strict": True}


def test_load_settings_file_errors(tmp_path) -> None:
    with pytest.raises(SystemExit):
        load_settings_file(str(tmp_path / "missing.yaml"))
    bad = tmp_path / "list.yaml"
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_settings_file(str(bad))
