"""Tests for the command-line entry point (zdotgen.cli)."""

from __future__ import annotations

import json

import pytest

from zdotgen.assembler import render_files
from zdotgen.cli import EXIT_SCHEMA_ERROR, EXIT_WRITE_ERROR, main, summarize
from zdotgen.schema.loader import load_config


pytestmark = pytest.mark.unit


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "zsh.yaml"
    path.write_text(
        "shellAliases:\n"
        "  ll: ls -l\n"
        "plugins:\n"
        "  - name: foo\n"
        "    src: /store/foo\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


class TestMain:
    def test_dry_run_writes_nothing(self, config_file, home, capsys):
        assert main([str(config_file), "--home", str(home), "--dry-run"]) == 0
        assert list(home.iterdir()) == []
        out = capsys.readouterr().out
        assert ".zshrc" in out
        assert "nix-zsh-completions" in out

    def test_writes_files(self, config_file, home, capsys):
        assert main([str(config_file), "--home", str(home)]) == 0
        assert "alias ll='ls -l'" in (home / ".zshrc").read_text()
        assert (home / ".zsh/plugins/foo").is_symlink()
        assert "Wrote 2 file(s)" in capsys.readouterr().out

    def test_json_output(self, config_file, home, capsys):
        assert main([str(config_file), "--home", str(home), "--dry-run", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [f["path"] for f in data["files"]] == [".zshrc", ".zsh/plugins/foo"]
        assert data["files"][1]["content"] == {"kind": "reference", "source": "/store/foo"}

    def test_schema_error(self, tmp_path, home, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("defaultKeymap: vim\n", encoding="utf-8")
        assert main([str(bad), "--home", str(home)]) == EXIT_SCHEMA_ERROR
        assert "defaultKeymap" in capsys.readouterr().out
        assert list(home.iterdir()) == []

    def test_missing_config(self, tmp_path, home, capsys):
        code = main([str(tmp_path / "missing.yaml"), "--home", str(home)])
        assert code == EXIT_SCHEMA_ERROR
        assert "not found" in capsys.readouterr().out

    def test_write_error(self, config_file, home, capsys):
        (home / ".zshrc").mkdir()
        assert main([str(config_file), "--home", str(home)]) == EXIT_WRITE_ERROR
        assert "Refusing to replace a directory" in capsys.readouterr().out

    def test_no_backup(self, config_file, home):
        (home / ".zshrc").write_text("mine\n")
        code = main([str(config_file), "--home", str(home), "--no-backup"])
        assert code == EXIT_WRITE_ERROR
        assert (home / ".zshrc").read_text() == "mine\n"

    def test_host_file(self, tmp_path, home, prezto_dist):
        config = tmp_path / "zsh.json"
        config.write_text(json.dumps({"prezto": {"enable": True}}), encoding="utf-8")
        host = tmp_path / "host.yaml"
        host.write_text(f"prezto:\n  root: {prezto_dist}\n", encoding="utf-8")
        assert main([str(config), "--home", str(home), "--host", str(host)]) == 0
        assert (home / ".zpreztorc").exists()
        assert (home / ".zprofile").is_symlink()

    def test_prezto_without_runcoms(self, tmp_path, home, capsys):
        config = tmp_path / "zsh.json"
        config.write_text(json.dumps({"prezto": {"enable": True}}), encoding="utf-8")
        assert main([str(config), "--home", str(home)]) == EXIT_SCHEMA_ERROR
        assert "host.prezto.runcoms.zshrc" in capsys.readouterr().out

    def test_disabled_config(self, tmp_path, home, capsys):
        config = tmp_path / "zsh.yaml"
        config.write_text("enable: false\n", encoding="utf-8")
        assert main([str(config), "--home", str(home)]) == 0
        assert "nothing to write" in capsys.readouterr().out
        assert list(home.iterdir()) == []

    def test_environment_host(self, config_file, home, monkeypatch):
        monkeypatch.setenv("ZDOTGEN_ZSH_PACKAGE", "/opt/zsh")
        assert main([str(config_file), "--home", str(home)]) == 0
        assert 'HELPDIR="/opt/zsh/share/zsh/$ZSH_VERSION/help"' in (home / ".zshrc").read_text()


def test_summarize(host, plugin_config):
    result = render_files(load_config(plugin_config, host), host)
    rows = summarize(result)
    assert rows[".zsh/plugins/enhancd"] == "-> /store/enhancd"
    assert rows[".zshrc"].endswith("line(s)")
    assert rows["packages"] == "zsh, nix-zsh-completions"
