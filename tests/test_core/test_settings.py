"""Tests for application settings."""

from campaign_parser.core.config import Settings


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SPACY_MODEL", raising=False)
        monkeypatch.delenv("TERM_DICTIONARY_PATH", raising=False)

        settings = Settings(_env_file=None)

        assert settings.spacy_model == "en_core_web_sm"
        assert settings.term_dictionary_path is None

    def test_environment_override(self, monkeypatch, tmp_path):
        terms = tmp_path / "terms.yaml"
        monkeypatch.setenv("SPACY_MODEL", "en_core_web_md")
        monkeypatch.setenv("TERM_DICTIONARY_PATH", str(terms))

        settings = Settings(_env_file=None)

        assert settings.spacy_model == "en_core_web_md"
        assert settings.term_dictionary_path == terms
