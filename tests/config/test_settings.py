"""Tests for PflowSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from pflow.config.settings import PflowSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PFLOW_CONFIG", "PFLOW_QUIET", "PFLOW_SIMULATE__MULTIPLIER"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = PflowSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.model.declaration is None
        assert settings.model.schema_name == "pflow"
        assert settings.simulate.multiplier == 1

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PflowSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pflow.toml").write_text(
            '[model]\ndeclaration = "models.py:octoe"\nschema_name = "octoe"\n'
        )
        settings = PflowSettings.from_cli(project_root=tmp_path)
        assert settings.model.declaration == "models.py:octoe"
        assert settings.model.schema_name == "octoe"
        assert settings.simulate.stop_on_error is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[simulate]\nmultiplier = 4\n")
        settings = PflowSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.simulate.multiplier == 4
        assert settings.config_path == custom

    def test_root_from_toml_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)
        (tmp_path / "pflow.toml").write_text("")
        monkeypatch.chdir(subdir)
        settings = PflowSettings.from_cli()
        assert settings.project_root.resolve() == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pflow.toml").write_text("[model\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PflowSettings.from_cli(project_root=tmp_path)


class TestOverrides:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pflow.toml").write_text("quiet = true\n")
        settings = PflowSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PFLOW_QUIET", "true")
        settings = PflowSettings.from_cli(project_root=tmp_path)
        assert settings.quiet is True

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "pflow.toml").write_text("[simulate]\nmultiplier = 2\n")
        monkeypatch.setenv("PFLOW_SIMULATE__MULTIPLIER", "5")
        settings = PflowSettings.from_cli(project_root=tmp_path)
        assert settings.simulate.multiplier == 5
