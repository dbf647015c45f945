from color_cycler.managers import ConfigManager
from color_cycler.models.config import AppConfig
from color_cycler.models.enums import LogLevel


def test_bundled_config_loads():
    config = ConfigManager().load()

    assert isinstance(config, AppConfig)
    assert config.state_path == "state/settings.json"
    assert config.log_level is LogLevel.INFO
    assert config.persist_window_seconds == 60.0
    assert config.theme is None


def test_custom_config_file(tmp_path):
    path = tmp_path / "cycler.yaml"
    path.write_text(
        "state_path: /tmp/cycler.json\n"
        "log_level: debug\n"
        "use_colors: false\n"
        "persist_window_seconds: 5\n"
        "theme: dark\n",
        encoding="utf-8",
    )

    config = ConfigManager(path).load()

    assert config == AppConfig(
        state_path="/tmp/cycler.json",
        log_level=LogLevel.DEBUG,
        use_colors=False,
        persist_window_seconds=5.0,
        theme="dark",
    )


def test_invalid_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "cycler.yaml"
    path.write_text("log_level: loud\npersist_window_seconds: -3\n", encoding="utf-8")

    config = ConfigManager(path).load()

    assert config.log_level is LogLevel.INFO
    assert config.persist_window_seconds == 60.0


def test_unreadable_config_uses_factory_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "missing.yaml")

    config = manager.load()

    assert config.use_colors is False
    assert config.state_path == "state/settings.json"


def test_non_mapping_config_uses_factory_defaults(tmp_path):
    path = tmp_path / "cycler.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    assert ConfigManager(path).load().use_colors is False
