# topmark:header:start
#
#   project      : LicenseTool
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the configuration model, TOML loading and layering."""

from __future__ import annotations

from pathlib import Path

import pytest

from licensetool.config import Config, MutableConfig
from licensetool.config.io import extract_tool_table, get_str_list, load_toml_dict
from licensetool.errors import ConfigError
from tests.conftest import mark_config, write_file


@mark_config
def test_defaults_freeze() -> None:
    """Defaults point to the conventional template locations."""
    config: Config = MutableConfig.from_defaults().freeze()

    assert config.header_license == Path("licenses/header.txt")
    assert config.standalone_license == Path("licenses/standalone.txt")
    assert config.fix is False
    assert config.use_gitignore is True
    assert config.excludes == ()
    assert dict(config.years) == {}


@mark_config
def test_frozen_config_is_immutable() -> None:
    """A frozen config rejects attribute and mapping mutation."""
    config: Config = MutableConfig.from_defaults().freeze()
    with pytest.raises(AttributeError):
        config.fix = True  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.years["a.js"] = 2020  # type: ignore[index]


@mark_config
def test_thaw_round_trip() -> None:
    """`thaw()` returns an editable draft that freezes back to an equal config."""
    draft: MutableConfig = MutableConfig.from_defaults()
    draft.excludes = ["dist/"]
    draft.years = {"a.js": 2019}
    config: Config = draft.freeze()

    thawed: MutableConfig = config.thaw()
    thawed.fix = True
    assert thawed.freeze().fix is True
    assert thawed.freeze().excludes == ("dist/",)
    assert config.fix is False


@mark_config
def test_from_toml_file_resolves_paths_against_file(tmp_path: Path) -> None:
    """Relative paths in a config file are resolved against its directory."""
    path: Path = write_file(
        tmp_path / "cfg" / "licensetool.toml",
        'header = "lic/h.txt"\n'
        "standalone = false\n"
        "fix = true\n"
        'excludes = ["dist/", "vendor/**"]\n'
        'log_file = "logs/run.log"\n'
        "\n"
        "[years]\n"
        '"./src/app.js" = 2017\n'
        '"bad.js" = "soon"\n',
    )
    draft = MutableConfig.from_toml_file(path)
    assert draft is not None
    config: Config = MutableConfig.from_defaults().merge_with(draft).freeze()

    base: Path = path.resolve().parent
    assert config.header_license == base / "lic" / "h.txt"
    assert config.standalone_license is None
    assert config.fix is True
    assert config.excludes == ("dist/", "vendor/**")
    assert config.log_file == base / "logs" / "run.log"
    assert dict(config.years) == {"src/app.js": 2017}
    assert config.config_files == (path,)


@mark_config
def test_pyproject_tool_table(tmp_path: Path) -> None:
    """``pyproject.toml`` settings live under ``[tool.licensetool]``."""
    write_file(tmp_path / "pyproject.toml", '[tool.licensetool]\nexcludes = "build/"\n')
    draft = MutableConfig.discover(tmp_path)

    assert draft is not None
    assert draft.excludes == ["build/"]


@mark_config
def test_pyproject_without_table_is_ignored(tmp_path: Path) -> None:
    """A pyproject without the tool table contributes nothing."""
    write_file(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert MutableConfig.discover(tmp_path) is None


@mark_config
def test_licensetool_toml_wins_over_pyproject(tmp_path: Path) -> None:
    """Discovery prefers ``licensetool.toml``."""
    write_file(tmp_path / "pyproject.toml", "[tool.licensetool]\nfix = true\n")
    write_file(tmp_path / "licensetool.toml", "fix = false\n")
    draft = MutableConfig.discover(tmp_path)

    assert draft is not None
    assert draft.fix is False


@mark_config
def test_discover_from_file_root_uses_parent(tmp_path: Path) -> None:
    """A file root searches its directory."""
    write_file(tmp_path / "licensetool.toml", "gitignore = false\n")
    app: Path = write_file(tmp_path / "app.js", "x\n")
    draft = MutableConfig.discover(app)

    assert draft is not None
    assert draft.use_gitignore is False


@mark_config
def test_merge_precedence() -> None:
    """Later drafts win for scalars; excludes are appended, years updated."""
    base: MutableConfig = MutableConfig.from_defaults()
    base.excludes = ["a/"]
    base.years = {"x.js": 2001, "y.js": 2002}
    override = MutableConfig(fix=True, excludes=["a/", "b/"], years={"y.js": 2010})

    config: Config = base.merge_with(override).freeze()

    assert config.fix is True
    assert config.excludes == ("a/", "b/")
    assert dict(config.years) == {"x.js": 2001, "y.js": 2010}
    assert config.header_license == Path("licenses/header.txt")


@mark_config
def test_disabled_standalone_can_be_reenabled() -> None:
    """An explicit standalone template re-enables the check."""
    base = MutableConfig.from_defaults().merge_with(MutableConfig(disable_standalone=True))
    assert base.freeze().standalone_license is None

    base.merge_with(MutableConfig(standalone_license=Path("L.txt"), disable_standalone=False))
    assert base.freeze().standalone_license == Path("L.txt")


@mark_config
def test_invalid_toml_raises(tmp_path: Path) -> None:
    """Malformed TOML is a configuration error."""
    path: Path = write_file(tmp_path / "licensetool.toml", "header = [unclosed\n")
    with pytest.raises(ConfigError):
        load_toml_dict(path)


@mark_config
def test_unknown_keys_and_bad_types_are_ignored(tmp_path: Path) -> None:
    """Unknown keys and wrongly typed values do not abort loading."""
    path: Path = write_file(tmp_path / "licensetool.toml", 'colour = "red"\nfix = "yes"\n')
    draft = MutableConfig.from_toml_file(path)

    assert draft is not None
    assert draft.fix is None


@mark_config
def test_get_str_list_filters_non_strings() -> None:
    """Non-string list entries are dropped."""
    assert get_str_list({"excludes": ["a", 1, "b"]}, "excludes") == ["a", "b"]
    assert get_str_list({"excludes": 3}, "excludes") is None


@mark_config
def test_extract_tool_table_passthrough_for_non_pyproject() -> None:
    """Files other than pyproject are the settings table themselves."""
    data = {"fix": True}
    assert extract_tool_table(Path("licensetool.toml"), data) is data
