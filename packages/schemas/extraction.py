"""Extraction schema.

An Extraction is one subject-relation-object(s) fact derived from a sentence,
together with its confidence and grammatical flags. Instances are immutable and
live only for the request that produced them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Extraction(BaseModel):
    """Single open information extraction produced by an extraction engine.

    Examples:
        >>> extraction = Extraction(
        ...     confidence=0.8,
        ...     relation="gave",
        ...     subject="Obama",
        ...     objects=["a speech"],
        ... )
        >>> extraction.triple_text
        '(Obama; gave; a speech)'
        >>> extraction.objects
        ('a speech',)
    """

    model_config = ConfigDict(frozen=True)

    confidence: float = Field(..., description="Engine confidence score (any real number)")
    context: str = Field("", description="Surrounding syntactic context, may be empty")
    negated: bool = Field(False, description="Whether the relation is negated")
    passive: bool = Field(False, description="Whether the relation is in passive voice")
    triple_text: str = Field(
        ...,
        description="Human-readable rendering of the whole extraction",
        examples=["(Obama; gave; a speech)"],
    )
    relation: str = Field(..., description="Predicate / relation phrase")
    subject: str = Field(..., description="First argument, commonly the grammatical subject")
    objects: tuple[str, ...] = Field(
        default=(),
        description="Secondary arguments in original order",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_triple_text(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("triple_text") is None:
            data = dict(data)
            data["triple_text"] = cls.render_triple(
                data.get("subject", ""),
                data.get("relation", ""),
                data.get("objects") or (),
            )
        return data

    @staticmethod
    def render_triple(subject: str, relation: str, objects: Any = ()) -> str:
        """Render ``(subject; relation; obj1; obj2)``.

        Examples:
            >>> Extraction.render_triple("Obama", "gave", ["a speech", "on Tuesday"])
            '(Obama; gave; a speech; on Tuesday)'
            >>> Extraction.render_triple("It", "rained")
            '(It; rained)'
        """
        return "(" + "; ".join([subject, relation, *objects]) + ")"


__all__ = ["Extraction"]
