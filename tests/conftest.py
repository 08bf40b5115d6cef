"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from changeinfo.changes import (
    OptionChangeInfo,
    PluginChangeInfo,
    PostChangeInfo,
    ThemeChangeInfo,
    WordPressUpdateChangeInfo,
)


@pytest.fixture
def post_created() -> PostChangeInfo:
    return PostChangeInfo(action="create", entity_id="9", post_title="Hello World", post_type="post")


@pytest.fixture
def post_updated() -> PostChangeInfo:
    return PostChangeInfo(action="update", entity_id="7", post_title="About", post_type="page")


@pytest.fixture
def core_update_bundle() -> list:
    """A core upgrade that also touched a plugin and two options, in arbitrary order."""
    return [
        OptionChangeInfo(action="edit", entity_id="WPLANG"),
        PluginChangeInfo(action="update", plugin_file="akismet/akismet.php", plugin_name="Akismet"),
        OptionChangeInfo(action="edit", entity_id="db_version"),
        WordPressUpdateChangeInfo(version="4.2"),
    ]


@pytest.fixture
def theme_switch() -> ThemeChangeInfo:
    return ThemeChangeInfo(action="switch", stylesheet="twentyfifteen", theme_name="Twenty Fifteen")


@pytest.fixture
def theme_activate() -> ThemeChangeInfo:
    return ThemeChangeInfo(action="activate", stylesheet="twentyfourteen", theme_name="Twenty Fourteen")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "changeinfo.toml"
    path.write_text(
        '[changeinfo]\nversion = "4.2.0"\n',
        encoding="utf-8",
    )
    return path
