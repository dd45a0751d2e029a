"""
Tests for the command-line interface.

Network access is never used: phrasebook hits answer offline and the online
tests patch the MyMemory transport.
"""

import pytest
from typer.testing import CliRunner

from voxtrans import __version__
from voxtrans.cli import app
from voxtrans.translate.dictionary import get_default_phrasebook
from voxtrans.translate.mymemory import MyMemoryTranslator

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "VOXTRANS_OFFLINE",
        "VOXTRANS_ONLINE_FALLBACK",
        "VOXTRANS_DEFAULT_SOURCE",
        "VOXTRANS_DEFAULT_TARGET",
        "VOXTRANS_MYMEMORY_EMAIL",
        "VOXTRANS_API_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestTranslateCommand:
    """Tests for `voxtrans translate`."""

    def test_offline_hit(self):
        result = runner.invoke(app, ["translate", "bom dia"])

        assert result.exit_code == 0
        assert "Translation: good morning" in result.stdout
        assert "Offline" in result.stdout

    def test_explicit_pair(self):
        result = runner.invoke(app, ["translate", "good morning", "-s", "en-US", "-l", "es-ES"])

        assert result.exit_code == 0
        assert "buenos días" in result.stdout

    def test_online_fallback(self, monkeypatch):
        monkeypatch.setattr(MyMemoryTranslator, "_fetch", lambda self, params: "foo")

        result = runner.invoke(app, ["translate", "xyzzy-unmatched"])

        assert result.exit_code == 0
        assert "Translation: foo" in result.stdout
        assert "Online" in result.stdout

    def test_offline_miss(self):
        result = runner.invoke(app, ["translate", "xyzzy-unmatched", "--offline"])

        assert result.exit_code == 1
        assert "Offline mode" in result.stdout

    def test_offline_from_environment(self, monkeypatch):
        monkeypatch.setenv("VOXTRANS_OFFLINE", "1")

        result = runner.invoke(app, ["translate", "xyzzy-unmatched"])

        assert result.exit_code == 1
        assert "Offline mode" in result.stdout

    def test_no_online(self):
        result = runner.invoke(app, ["translate", "xyzzy-unmatched", "--no-online"])

        assert result.exit_code == 1
        assert "No offline translation" in result.stdout

    def test_unsupported_language(self):
        result = runner.invoke(app, ["translate", "bom dia", "--target", "xx-YY"])

        assert result.exit_code == 1
        assert "Unsupported language" in result.stdout

    def test_blank_input(self):
        result = runner.invoke(app, ["translate", "   "])

        assert result.exit_code == 0
        assert "Translation" not in result.stdout

    def test_extra_phrasebook(self, tmp_path):
        path = tmp_path / "extra.csv"
        path.write_text(
            "source_lang,target_lang,source,target\n"
            "pt,en,onde fica o museu?,where is the museum?\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["translate", "onde fica o museu?", "--offline", "-p", str(path)])

        assert result.exit_code == 0
        assert "where is the museum?" in result.stdout

    @pytest.mark.parametrize("target", ["[/] ok", "see [bold]x", "[note] ok"])
    def test_bracketed_translation_printed_verbatim(self, tmp_path, target):
        path = tmp_path / "brackets.csv"
        path.write_text(
            f'source_lang,target_lang,source,target\npt,en,marcador,"{target}"\n',
            encoding="utf-8",
        )

        result = runner.invoke(
            app, ["translate", "marcador", "--no-online", "-p", str(path)],
        )

        assert result.exit_code == 0
        assert f"Translation: {target}" in result.stdout

    def test_bracketed_online_translation(self, monkeypatch):
        monkeypatch.setattr(MyMemoryTranslator, "_fetch", lambda self, params: "[/] [red]foo")

        result = runner.invoke(app, ["translate", "xyzzy-unmatched"])

        assert result.exit_code == 0
        assert "Translation: [/] [red]foo" in result.stdout

    def test_invalid_timeout_setting(self, monkeypatch):
        monkeypatch.setenv("VOXTRANS_API_TIMEOUT", "soon")

        result = runner.invoke(app, ["translate", "bom dia"])

        assert result.exit_code == 1
        assert "VOXTRANS_API_TIMEOUT must be a number" in result.stdout
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_missing_phrasebook(self, tmp_path):
        result = runner.invoke(app, ["translate", "oi", "-p", str(tmp_path / "nope.csv")])

        assert result.exit_code == 1
        assert "Phrasebook not found" in result.stdout


class TestOtherCommands:
    """Tests for languages, phrases, info and --version."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_languages(self):
        result = runner.invoke(app, ["languages"])

        assert result.exit_code == 0
        assert "pt-BR" in result.stdout
        assert "Português" in result.stdout
        assert "zh-CN" in result.stdout

    def test_phrases(self, tmp_path):
        path = tmp_path / "extra.csv"
        path.write_text("source_lang,target_lang,source,target\npt,en,trem,train\n", encoding="utf-8")

        result = runner.invoke(app, ["phrases", "--source", "pt-BR", "-p", str(path)])

        assert result.exit_code == 0
        assert f"{len(get_default_phrasebook()) + 1} phrases total" in result.stdout

    def test_info(self):
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "online_fallback" in result.stdout
        assert "Português" in result.stdout


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
