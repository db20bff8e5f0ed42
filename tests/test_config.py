"""Tests for configuration persistence."""

from pathlib import Path

import pytest
import yaml

from notes_publisher.config import (
    CONFIG_ENV_VAR,
    Config,
    ConfigurationError,
    config_path,
    load_config,
    save_config,
)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "conf" / "config.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    return path


class TestConfigPath:
    def test_env_override(self, config_file):
        assert config_path() == config_file

    def test_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_path() == tmp_path / ".config" / "notes-publisher" / "config.yaml"


class TestLoadSave:
    def test_round_trip(self, config_file, tmp_path):
        config = Config(
            source_dir=tmp_path / "source",
            blog_dir=tmp_path / "blog",
            backup_dir=tmp_path / "backups",
            include_frontmatter=True,
            link_style="hugo",
        )

        written = save_config(config)

        assert written == config_file
        assert load_config() == config

    def test_file_is_yaml(self, config_file, tmp_path):
        save_config(Config(source_dir=tmp_path / "s", blog_dir=tmp_path / "b"))

        data = yaml.safe_load(config_file.read_text())

        assert data["source_dir"] == str(tmp_path / "s")
        assert data["backup_dir"] is None

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "elsewhere.yaml"
        config = Config(source_dir=tmp_path / "s", blog_dir=tmp_path / "b")

        save_config(config, path)

        assert load_config(path) == config

    def test_missing_file(self, config_file):
        with pytest.raises(ConfigurationError, match="No configuration found"):
            load_config()

    def test_invalid_yaml(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("source_dir: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_not_a_mapping(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_missing_keys(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("source_dir: /notes\n")

        with pytest.raises(ConfigurationError, match="blog_dir"):
            load_config()

    def test_user_paths_expanded(self, config_file, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        config_file.parent.mkdir(parents=True)
        config_file.write_text("source_dir: ~/notes\nblog_dir: ~/blog\n")

        config = load_config()

        assert config.source_dir == tmp_path / "notes"
        assert config.blog_dir == tmp_path / "blog"
        assert config.backup_dir is None


class TestValidate:
    @pytest.fixture
    def source(self, tmp_path):
        source = tmp_path / "source"
        source.mkdir()
        return source

    def test_valid(self, source, tmp_path):
        Config(source_dir=source, blog_dir=tmp_path / "blog").validate()

    def test_missing_source(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Source directory not found"):
            Config(source_dir=tmp_path / "missing", blog_dir=tmp_path / "blog").validate()

    def test_same_directories(self, source):
        with pytest.raises(ConfigurationError, match="must differ"):
            Config(source_dir=source, blog_dir=source).validate()

    def test_blog_is_a_file(self, source, tmp_path):
        blog = tmp_path / "blog"
        blog.write_text("x")
        with pytest.raises(ConfigurationError):
            Config(source_dir=source, blog_dir=blog).validate()

    def test_blog_inside_source(self, source):
        with pytest.raises(ConfigurationError, match="must not contain each other"):
            Config(source_dir=source, blog_dir=source / "blog").validate()

    def test_source_inside_blog(self, source):
        with pytest.raises(ConfigurationError, match="must not contain each other"):
            Config(source_dir=source, blog_dir=source.parent).validate()

    def test_backup_inside_source(self, source, tmp_path):
        with pytest.raises(ConfigurationError, match="must not contain each other"):
            Config(source_dir=source, blog_dir=tmp_path / "blog", backup_dir=source / "backups").validate()

    def test_backup_inside_blog(self, source, tmp_path):
        blog = tmp_path / "blog"
        with pytest.raises(ConfigurationError, match="must not contain each other"):
            Config(source_dir=source, blog_dir=blog, backup_dir=blog / ".backups").validate()

    def test_sibling_directories(self, source, tmp_path):
        Config(
            source_dir=source,
            blog_dir=tmp_path / "blog",
            backup_dir=tmp_path / "backups",
        ).validate()

    def test_unknown_frontmatter_style(self, source, tmp_path):
        with pytest.raises(ConfigurationError, match="Unknown frontmatter style"):
            Config(source_dir=source, blog_dir=tmp_path / "blog", frontmatter_style="jekyll").validate()

    def test_unknown_link_style(self, source, tmp_path):
        with pytest.raises(ConfigurationError, match="Unknown link style"):
            Config(source_dir=source, blog_dir=tmp_path / "blog", link_style="wiki").validate()

    def test_from_dict_rejects_bad_flag(self):
        with pytest.raises(ConfigurationError):
            Config.from_dict({"source_dir": "/a", "blog_dir": "/b", "include_frontmatter": "yes please"})

    def test_from_dict_paths(self):
        config = Config.from_dict({"source_dir": "/a", "blog_dir": "/b", "backup_dir": "/c"})
        assert config.source_dir == Path("/a")
        assert config.backup_dir == Path("/c")
