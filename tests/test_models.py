import pytest
from pydantic import ValidationError

from api_intent_agent.intent.models import AnalyzedInput, IntentMatch
from api_intent_agent.parser.base import EndpointRecord


class TestEndpointRecord:
    def test_create_minimal_record(self):
        ep = EndpointRecord(path="/users", method="GET")
        assert ep.description == ""
        assert ep.parameters == ()
        assert ep.request_body is None
        assert ep.key == ("/users", "GET")

    def test_record_is_immutable(self):
        ep = EndpointRecord(path="/users", method="GET", description="List users")
        with pytest.raises(ValidationError):
            ep.path = "/other"


class TestAnalyzedInput:
    def test_keeps_candidate_references(self):
        ep = EndpointRecord(path="/users", method="GET")
        analyzed = AnalyzedInput(keywords=frozenset({"users"}), candidates=(ep,))
        assert analyzed.candidates[0] is ep


class TestIntentMatch:
    def test_method_is_upper_cased(self):
        match = IntentMatch(endpoint="/users", method="get", confidence=0.5, explanation="x")
        assert match.method == "GET"

    @pytest.mark.parametrize("confidence", [-0.1, 1.5])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValidationError):
            IntentMatch(endpoint="/users", method="GET", confidence=confidence, explanation="x")

    def test_requires_explanation(self):
        with pytest.raises(ValidationError):
            IntentMatch(endpoint="/users", method="GET", confidence=0.5)
