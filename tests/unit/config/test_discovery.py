from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem
from pytest_mock import MockerFixture

from runguard.config import DEFAULT_CONFIG, ConfigSourceName
from runguard.config._discovery import (
    _file_exists,
    discover_sources,
    get_user_config_path,
)

USER_CONFIG = Path("/home/user/.config/runguard/config.toml")


@pytest.fixture
def user_config_path(mocker: MockerFixture) -> Path:
    mocker.patch(
        "runguard.config._discovery.get_user_config_path", return_value=USER_CONFIG
    )
    return USER_CONFIG


class TestGetUserConfigPath:
    def test_returns_path_with_config_toml_filename(self) -> None:
        result = get_user_config_path()

        assert result.name == "config.toml"
        assert result.parent.name == "runguard"


class TestFileExists:
    def test_returns_true_for_existing_file(self, fs: FakeFilesystem) -> None:
        fs.create_file("/a.toml")

        assert _file_exists(Path("/a.toml"))

    def test_returns_false_for_missing_file(self, fs: FakeFilesystem) -> None:
        assert not _file_exists(Path("/missing.toml"))

    def test_returns_false_for_directory(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/dir.toml")

        assert not _file_exists(Path("/dir.toml"))


class TestDiscoverSources:
    def test_returns_sources_in_precedence_order(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        sources = discover_sources(
            Path("/explicit.toml"), cli_overrides={"logging": {"level": "info"}}
        )

        assert [source.name for source in sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.FILE,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_omits_cli_source_without_overrides(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        sources = discover_sources(cli_overrides={})

        assert ConfigSourceName.CLI not in [source.name for source in sources]

    def test_excludes_env_source_when_not_requested(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        sources = discover_sources(include_env=False)

        assert [source.name for source in sources] == [
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_env_source_holds_parsed_values(
        self,
        fs: FakeFilesystem,
        user_config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("RUNGUARD_TIMEOUT__SIGNAL", "INT")

        env = discover_sources()[0]

        assert env.name is ConfigSourceName.ENV
        assert env.exists
        assert env.values == {"timeout": {"signal": "INT"}}

    def test_env_source_missing_when_no_variables(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        env = discover_sources()[0]

        assert env.name is ConfigSourceName.ENV
        assert not env.exists

    def test_marks_user_file_existence(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        assert not discover_sources()[-2].exists

        fs.create_file(user_config_path, contents="")

        user = discover_sources()[-2]
        assert user.name is ConfigSourceName.USER
        assert user.path == user_config_path
        assert user.exists

    def test_explicit_file_is_always_marked_existing(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        sources = discover_sources(Path("/missing.toml"), include_env=False)

        assert sources[0].name is ConfigSourceName.FILE
        assert sources[0].path == Path("/missing.toml")
        assert sources[0].exists

    def test_default_source_has_default_config_values(
        self, fs: FakeFilesystem, user_config_path: Path
    ) -> None:
        default = discover_sources()[-1]

        assert default.name is ConfigSourceName.DEFAULT
        assert default.values == DEFAULT_CONFIG
        assert default.path is None
