"""
Tests for compiler configuration loading.
"""

import textwrap

import pytest

from condcss.config import (
    CONCAT_LIMIT_ENV,
    DEFAULT_CONCAT_LIMIT,
    CompilerOptions,
    load_options,
)
from condcss.errors import ConfigError
from tests.helpers import write


class TestCompilerOptions:

    def test_defaults(self):
        assert CompilerOptions().concat_limit == DEFAULT_CONCAT_LIMIT == 20

    @pytest.mark.parametrize("value", [0, -1, "5", 2.5, True])
    def test_invalid_limit(self, value):
        with pytest.raises(ConfigError, match="concat_limit"):
            CompilerOptions(concat_limit=value)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigError, match="Unknown compiler option\\(s\\): depth"):
            CompilerOptions.from_dict({"concat_limit": 3, "depth": 1})


class TestLoadOptions:

    def test_no_path(self):
        assert load_options() == CompilerOptions()

    def test_missing_file_means_defaults(self, tmp_path):
        assert load_options(tmp_path / "absent.yaml") == CompilerOptions()

    def test_yaml_section(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", textwrap.dedent("""
            compiler:
              concat_limit: 7
        """))
        assert load_options(path).concat_limit == 7

    def test_empty_file(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "")
        assert load_options(path) == CompilerOptions()

    def test_other_sections_are_ignored(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "project: demo\ncompiler: {}\n")
        assert load_options(path) == CompilerOptions()

    def test_invalid_yaml(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "compiler: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_options(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_options(path)

    def test_compiler_section_must_be_mapping(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "compiler: 5\n")
        with pytest.raises(ConfigError, match="'compiler' section must be a mapping"):
            load_options(path)

    def test_unknown_key_in_file(self, tmp_path):
        path = write(tmp_path / "condcss.yaml", "compiler:\n  concat_limt: 3\n")
        with pytest.raises(ConfigError, match="concat_limt"):
            load_options(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = write(tmp_path / "condcss.yaml", "compiler:\n  concat_limit: 7\n")
        monkeypatch.setenv(CONCAT_LIMIT_ENV, " 3 ")
        assert load_options(path).concat_limit == 3

    def test_blank_env_is_ignored(self, monkeypatch):
        monkeypatch.setenv(CONCAT_LIMIT_ENV, "  ")
        assert load_options().concat_limit == DEFAULT_CONCAT_LIMIT

    @pytest.mark.parametrize("raw", ["abc", "0"])
    def test_invalid_env(self, raw, monkeypatch):
        monkeypatch.setenv(CONCAT_LIMIT_ENV, raw)
        with pytest.raises(ConfigError):
            load_options()
