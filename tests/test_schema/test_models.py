"""Tests for the option models (zdotgen.schema.models).

Covers:
- Defaults of every option record
- camelCase and snake_case input keys
- Sibling-derived defaults (history save, plugin file)
- Field and model invariants (dotDir, alias names, plugin names)
- Derived properties (plugins_dir, runs_compinit)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from zdotgen.schema.models import (
    DEFAULT_PMODULES,
    HistoryPolicy,
    Plugin,
    Prezto,
    ZshConfig,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# HistoryPolicy
# ---------------------------------------------------------------------------


class TestHistoryPolicy:
    def test_defaults(self):
        policy = HistoryPolicy()
        assert policy.size == 10000
        assert policy.save == 10000
        assert policy.path is None
        assert policy.ignore_dups is True
        assert policy.ignore_space is True
        assert policy.expire_duplicates_first is False
        assert policy.extended is False
        assert policy.share is True

    def test_save_defaults_to_size(self):
        assert HistoryPolicy.model_validate({"size": 5000}).save == 5000

    def test_explicit_save_kept(self):
        policy = HistoryPolicy.model_validate({"size": 5000, "save": 100})
        assert policy.save == 100

    def test_camel_case_flags(self):
        policy = HistoryPolicy.model_validate(
            {"ignoreDups": False, "expireDuplicatesFirst": True}
        )
        assert policy.ignore_dups is False
        assert policy.expire_duplicates_first is True

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            HistoryPolicy.model_validate({"size": -1})


# ---------------------------------------------------------------------------
# Plugin
# ---------------------------------------------------------------------------


class TestPlugin:
    def test_file_defaults_to_name(self):
        plugin = Plugin.model_validate({"name": "foo", "src": "/store/foo"})
        assert plugin.file == "foo.plugin.zsh"

    def test_explicit_file(self):
        plugin = Plugin.model_validate({"name": "enhancd", "src": "/x", "file": "init.sh"})
        assert plugin.file == "init.sh"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Plugin.model_validate({"src": "/x"})

    def test_src_required(self):
        with pytest.raises(ValidationError):
            Plugin.model_validate({"name": "foo"})

    @pytest.mark.parametrize("name", ["a/b", "..", "."])
    def test_name_must_be_single_segment(self, name):
        with pytest.raises(ValidationError):
            Plugin.model_validate({"name": name, "src": "/x"})


# ---------------------------------------------------------------------------
# Prezto
# ---------------------------------------------------------------------------


class TestPrezto:
    def test_defaults(self):
        prezto = Prezto()
        assert prezto.enable is False
        assert prezto.color is True
        assert prezto.case_sensitive is None
        assert prezto.pmodules == DEFAULT_PMODULES
        assert prezto.editor.keymap == "emacs"
        assert prezto.prompt.theme == "sorin"
        assert prezto.ssh.identities == []

    def test_pmodules_default_is_a_copy(self):
        Prezto().pmodules.append("git")
        assert "git" not in Prezto().pmodules

    def test_nested_camel_case(self):
        prezto = Prezto.model_validate(
            {
                "historySubstring": {"foundColor": "fg=blue"},
                "macOS": {"dashKeyword": "manpages"},
                "syntaxHighlighting": {"styles": {"builtin": "bg=blue"}},
            }
        )
        assert prezto.history_substring.found_color == "fg=blue"
        assert prezto.mac_os.dash_keyword == "manpages"
        assert prezto.syntax_highlighting.styles == {"builtin": "bg=blue"}

    def test_enum_values_stored_as_text(self):
        prezto = Prezto.model_validate(
            {"git": {"submoduleIgnore": "all"}, "prompt": {"pwdLength": "short"}}
        )
        assert prezto.git.submodule_ignore == "all"
        assert prezto.prompt.pwd_length == "short"

    def test_enum_violation(self):
        with pytest.raises(ValidationError):
            Prezto.model_validate({"editor": {"keymap": "vim"}})

    def test_keymap_can_be_unset(self):
        assert Prezto.model_validate({"editor": {"keymap": None}}).editor.keymap is None


# ---------------------------------------------------------------------------
# ZshConfig
# ---------------------------------------------------------------------------


class TestZshConfig:
    def test_defaults(self):
        config = ZshConfig()
        assert config.enable is True
        assert config.autocd is None
        assert config.dot_dir is None
        assert config.enable_completion is None
        assert config.enable_autosuggestions is False
        assert config.plugins == []
        assert config.oh_my_zsh.enable is False
        assert config.prezto.enable is False

    def test_oh_my_zsh_alias(self):
        config = ZshConfig.model_validate({"oh-my-zsh": {"enable": True, "plugins": ["git"]}})
        assert config.oh_my_zsh.enable is True
        assert config.oh_my_zsh.plugins == ["git"]

    def test_snake_case_accepted(self):
        config = ZshConfig.model_validate({"dot_dir": ".config/zsh", "oh_my_zsh": {}})
        assert config.dot_dir == ".config/zsh"

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ZshConfig.model_validate({"enableSpellcheck": True})

    def test_frozen(self):
        config = ZshConfig()
        with pytest.raises(ValidationError):
            config.autocd = True

    def test_dot_dir_trailing_slash_stripped(self):
        assert ZshConfig.model_validate({"dotDir": ".config/zsh/"}).dot_dir == ".config/zsh"

    @pytest.mark.parametrize("dot_dir", ["/etc/zsh", "", "/"])
    def test_bad_dot_dir(self, dot_dir):
        with pytest.raises(ValidationError):
            ZshConfig.model_validate({"dotDir": dot_dir})

    @pytest.mark.parametrize("name", ["", "a=b", "two words"])
    def test_bad_alias_name(self, name):
        with pytest.raises(ValidationError):
            ZshConfig.model_validate({"shellAliases": {name: "ls"}})

    def test_bad_variable_name(self):
        with pytest.raises(ValidationError):
            ZshConfig.model_validate({"sessionVariables": {"1ABC": "x"}})

    def test_variable_values(self):
        config = ZshConfig.model_validate(
            {"localVariables": {"A": True, "B": 3, "C": "x", "D": ["p", "q"]}}
        )
        assert config.local_variables == {"A": True, "B": 3, "C": "x", "D": ["p", "q"]}

    def test_nested_mapping_variable_rejected(self):
        with pytest.raises(ValidationError):
            ZshConfig.model_validate({"sessionVariables": {"X": {"a": 1}}})

    def test_duplicate_plugin_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate plugin name"):
            ZshConfig.model_validate(
                {"plugins": [{"name": "foo", "src": "/a"}, {"name": "foo", "src": "/b"}]}
            )

    def test_plugin_order_preserved(self, plugin_config):
        config = ZshConfig.model_validate(plugin_config)
        assert [p.name for p in config.plugins] == ["zsh-autosuggestions", "enhancd"]


class TestDerivedProperties:
    def test_plugins_dir_default(self):
        assert ZshConfig().plugins_dir == ".zsh/plugins"

    def test_plugins_dir_under_dot_dir(self):
        assert ZshConfig(dot_dir=".config/zsh").plugins_dir == ".config/zsh/plugins"

    def test_rel_to_dot_dir(self):
        assert ZshConfig().rel_to_dot_dir(".zshrc") == ".zshrc"
        assert ZshConfig(dot_dir="zsh").rel_to_dot_dir(".zshrc") == "zsh/.zshrc"

    def test_runs_compinit(self):
        assert ZshConfig(enable_completion=True).runs_compinit is True
        assert ZshConfig(enable_completion=False).runs_compinit is False

    @pytest.mark.parametrize("framework", ["oh-my-zsh", "prezto"])
    def test_framework_suppresses_compinit(self, framework):
        config = ZshConfig.model_validate(
            {"enableCompletion": True, framework: {"enable": True}}
        )
        assert config.framework_enabled is True
        assert config.runs_compinit is False
