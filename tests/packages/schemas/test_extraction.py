"""Tests for the Extraction schema."""

import pytest
from pydantic import ValidationError

from packages.schemas.extraction import Extraction


@pytest.mark.unit
class TestExtraction:
    """Test Extraction model behaviour."""

    def test_objects_are_stored_as_tuple(self) -> None:
        extraction = Extraction(
            confidence=0.8, relation="gave", subject="Obama", objects=["a speech", "on Tuesday"]
        )

        assert extraction.objects == ("a speech", "on Tuesday")

    def test_triple_text_defaults_to_rendering(self) -> None:
        extraction = Extraction(confidence=0.8, relation="gave", subject="Obama", objects=["a speech"])

        assert extraction.triple_text == "(Obama; gave; a speech)"

    def test_explicit_triple_text_is_kept(self) -> None:
        extraction = Extraction(
            confidence=0.8,
            relation="gave",
            subject="Obama",
            triple_text="Context(said):(Obama; gave)",
        )

        assert extraction.triple_text == "Context(said):(Obama; gave)"

    def test_defaults(self) -> None:
        extraction = Extraction(confidence=-1.5, relation="rained", subject="It")

        assert extraction.context == ""
        assert extraction.negated is False
        assert extraction.passive is False
        assert extraction.objects == ()
        assert extraction.confidence == -1.5

    def test_is_immutable(self) -> None:
        extraction = Extraction(confidence=0.8, relation="gave", subject="Obama")

        with pytest.raises(ValidationError):
            extraction.subject = "Biden"  # type: ignore[misc]

    def test_requires_relation_and_subject(self) -> None:
        with pytest.raises(ValidationError):
            Extraction(confidence=0.8)  # type: ignore[call-arg]

    def test_render_triple_without_objects(self) -> None:
        assert Extraction.render_triple("It", "rained") == "(It; rained)"
