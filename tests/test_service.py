"""
Unit tests for BylawComplianceService.
"""

import pytest


def _service(rule_client=None, qa_client=None, sleep=None):
    from bylawcheck.knowledge import BylawQAResolver, RuleResolver
    from bylawcheck.service import BylawComplianceService

    kwargs = {"sleep": sleep} if sleep else {}
    return BylawComplianceService(
        rule_resolver=RuleResolver(rule_client, **kwargs),
        qa_resolver=BylawQAResolver(qa_client, **kwargs),
    )


class TestCheckCompliance:
    """Tests for the compliance entry point."""

    def test_defaults_all_compliant(self, sample_row):
        """Test the reference row passes against default rules."""
        report = _service().check_compliance(sample_row)

        assert report.project_name == "Green Tower 2"
        assert report.filename == "Green_Tower_2.csv"
        assert report.rules_source == "default"
        assert report.summary.compliant == 4
        assert report.summary.violations == 0

    def test_external_rules(self, sample_row, external_rules_reply, fake_sleep):
        """Test rules from the service are applied and flagged external."""
        from bylawcheck.knowledge import MockKnowledgeClient

        row = dict(sample_row, height_m="14", far_utilized="1.5")
        client = MockKnowledgeClient([external_rules_reply])
        report = _service(rule_client=client, sleep=fake_sleep).check_compliance(row)

        assert report.rules_source == "external"
        assert report.checks[0].limit == {"max": 15}
        assert report.summary.violations == 0

    def test_accepts_record(self, sample_record):
        """Test an already-normalized record is accepted."""
        report = _service().check_compliance(sample_record)

        assert report.project_name == sample_record.project_name

    @pytest.mark.parametrize("missing", ["project_name", "building_type", "location"])
    def test_missing_required_field(self, sample_row, missing):
        """Test missing text fields are rejected."""
        from bylawcheck.exceptions import InvalidInput

        row = dict(sample_row)
        row[missing] = "  "

        with pytest.raises(InvalidInput, match=missing):
            _service().check_compliance(row)

    def test_non_mapping_is_internal_error(self):
        """Test a malformed row surfaces as UnexpectedInternal."""
        from bylawcheck.exceptions import UnexpectedInternal

        with pytest.raises(UnexpectedInternal):
            _service().check_compliance(["not", "a", "row"])

    def test_from_settings_offline(self):
        """Test wiring from settings without credentials stays offline."""
        from bylawcheck.config import Settings
        from bylawcheck.service import BylawComplianceService

        service = BylawComplianceService.from_settings(Settings())

        assert service.rule_resolver.client is None
        assert service.qa_resolver.client is None
        assert service.rule_resolver.defaults.height_max == 12

    def test_from_settings_configured(self, knowledge_config):
        """Test configured settings build a LlamaCloud client."""
        from bylawcheck.config import Settings
        from bylawcheck.knowledge import LlamaCloudClient
        from bylawcheck.service import BylawComplianceService

        service = BylawComplianceService.from_settings(Settings(knowledge=knowledge_config))

        assert isinstance(service.rule_resolver.client, LlamaCloudClient)
        assert service.rule_resolver.document_id == "doc-123"
        assert service.qa_resolver.retries == 1


class TestAskBylaw:
    """Tests for the bylaw Q&A entry point."""

    def test_canned_answer(self):
        """Test offline questions use the canned table."""
        answer = _service().ask_bylaw("Min stair width")

        assert answer.clause is not None

    def test_empty_question(self):
        """Test empty questions are rejected."""
        from bylawcheck.exceptions import InvalidInput

        with pytest.raises(InvalidInput):
            _service().ask_bylaw("")

    def test_raw_context_normalized(self, sample_row):
        """Test a raw context row is normalized into the prompt."""
        from bylawcheck.core import normalize
        from bylawcheck.knowledge import MockKnowledgeClient

        client = MockKnowledgeClient()
        _service(qa_client=client).ask_bylaw("Is my FAR fine?", context=sample_row)

        assert normalize(sample_row).model_dump_json() in client.calls[0]
