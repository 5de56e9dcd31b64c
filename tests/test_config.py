"""
Unit tests for bylawcheck configuration.
"""

import pytest


class TestDefaultRules:
    """Tests for default rule loading."""

    def test_packaged_rules_match_builtin(self):
        """Test the bundled YAML reproduces the in-code defaults."""
        from bylawcheck.config import DEFAULT_RULES, Settings, load_default_rules

        rules = load_default_rules(Settings().rules_file)

        assert rules == DEFAULT_RULES

    def test_none_path(self):
        """Test no path returns the in-code defaults."""
        from bylawcheck.config import DEFAULT_RULES, load_default_rules

        assert load_default_rules(None) is DEFAULT_RULES

    def test_override_file(self, tmp_path):
        """Test a custom rules document overrides the defaults."""
        from bylawcheck.config import load_default_rules

        path = tmp_path / "rules.json"
        path.write_text(
            '{"height_max": 18, "height_clause": "Clause X", '
            '"setback": {"front": 5, "rear": 2, "side": 2}, '
            '"parking_min": 8, "far_max": 2.0}'
        )
        rules = load_default_rules(path)

        assert rules.height_max == 18
        assert rules.setback.front == 5
        assert rules.setback.front_clause is None
        assert rules.far_clause is None

    @pytest.mark.parametrize("content", ["", "height_max: [1, 2", "height_max: 12\n", "- a\n- b\n"])
    def test_broken_file_falls_back(self, tmp_path, content):
        """Test unreadable or incomplete rules files fall back to defaults."""
        from bylawcheck.config import DEFAULT_RULES, load_default_rules

        path = tmp_path / "rules.yaml"
        path.write_text(content)

        assert load_default_rules(path) is DEFAULT_RULES

    @pytest.mark.parametrize("content", [b'height_clause: "\xff\xfe bad"', b"\x80\x81\x82"])
    def test_undecodable_file_falls_back(self, tmp_path, content):
        """Test a rules file that is not UTF-8 falls back to defaults."""
        from bylawcheck.config import DEFAULT_RULES, load_default_rules

        path = tmp_path / "rules.yaml"
        path.write_bytes(content)

        assert load_default_rules(path) is DEFAULT_RULES

    def test_undecodable_file_service_starts(self, tmp_path):
        """Test the service still starts with an undecodable rules file."""
        from bylawcheck.config import Settings
        from bylawcheck.service import BylawComplianceService

        path = tmp_path / "rules.yaml"
        path.write_bytes(b"\x80\x81\x82")

        service = BylawComplianceService.from_settings(Settings(rules_file=path))

        assert service.rule_resolver.defaults.height_max == 12

    def test_utf8_clause_text(self, tmp_path):
        """Test non-ASCII clause text loads regardless of locale."""
        from bylawcheck.config import load_default_rules

        path = tmp_path / "rules.yaml"
        path.write_bytes(
            "height_max: 12\n"
            "height_clause: \"BBMP 2019, § 4.3.2\"\n"
            "setback: {front: 7, rear: 3, side: 3}\n"
            "parking_min: 15\n"
            "far_max: 1.25\n".encode("utf-8")
        )

        assert load_default_rules(path).height_clause == "BBMP 2019, § 4.3.2"

    def test_missing_file_falls_back(self, tmp_path):
        """Test a missing rules file falls back to defaults."""
        from bylawcheck.config import DEFAULT_RULES, load_default_rules

        assert load_default_rules(tmp_path / "absent.yaml") is DEFAULT_RULES


class TestSettings:
    """Tests for Settings."""

    def test_env_override(self, monkeypatch):
        """Test BYLAWCHECK_ variables override defaults."""
        from bylawcheck.config import Settings

        monkeypatch.setenv("BYLAWCHECK_API_PORT", "9000")
        monkeypatch.setenv("BYLAWCHECK_LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.api_port == 9000
        assert settings.log_level == "DEBUG"

    def test_knowledge_unconfigured_by_default(self):
        """Test credentials are absent without environment variables."""
        from bylawcheck.config import Settings

        assert not Settings().knowledge.is_configured

    def test_blank_credentials_not_configured(self):
        """Test whitespace credentials count as missing."""
        from bylawcheck.config import KnowledgeServiceConfig

        config = KnowledgeServiceConfig(api_key=" ", endpoint="https://x", document_id="d")

        assert not config.is_configured
