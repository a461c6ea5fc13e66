"""Regex-based extraction engine.

Model-free backend: recognizes relation phrases with a small verb lexicon and
regular inflections. Lower recall than the spaCy backend, but it needs no
model download and is deterministic.
"""

import re

from packages.schemas.extraction import Extraction

_AUX = r"(?:is|are|was|were|am|be|been|being|has|have|had|does|do|did|will|would|can|could|should|may|might|must)"

_VERBS = (
    r"(?:is|are|was|were|has|have|had|gave|gives|give|made|makes|make|took|takes|take|"
    r"got|gets|get|went|goes|go|said|says|say|saw|sees|see|found|finds|find|"
    r"won|wins|win|wrote|writes|write|built|builds|build|bought|buys|buy|"
    r"sold|sells|sell|led|leads|lead|met|meets|meet|became|becomes|become|"
    r"knew|knows|know|left|leaves|leave|told|tells|tell|ran|runs|run|"
    r"contains|contain|includes|include|requires|require|uses|use|owns|own|"
    r"(?-i:[a-z]{2,}ed))"
)

_PREPOSITIONS = r"(?:on|in|at|to|for|with|from|during|after|before|into|about|under|over)"

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_CONTEXT = re.compile(
    r"^(?P<context>(?:\w+\s+){1,3}?(?:said|says|claimed|claims|reported|reports|believes|believed|thinks|thought))"
    r"\s+(?:that\s+)?(?P<rest>.+)$",
    re.IGNORECASE,
)
_OBJECT_SPLIT = re.compile(rf"\s+(?={_PREPOSITIONS}\s)", re.IGNORECASE)


class PatternExtractionEngine:
    """Extract relations from text using ordered regex patterns.

    Patterns, tried in order for each sentence:
        NEGATED: "X did not give Y"
        PASSIVE: "Y was given by X"
        ACTIVE:  "X gave Y"
    """

    name = "pattern"

    def __init__(self) -> None:
        """Initialize the engine with compiled relation patterns."""
        self.patterns = self._build_patterns()

    def _build_patterns(self) -> dict[str, re.Pattern[str]]:
        """Build regex patterns for relation extraction.

        Returns:
            dict[str, re.Pattern]: Compiled patterns by relation kind.
        """
        return {
            "NEGATED": re.compile(
                rf"^(?P<arg1>.+?)\s+(?P<rel>{_AUX}\s+(?:not|never)\s+\w+)(?:\s+(?P<arg2>.+))?$",
                re.IGNORECASE,
            ),
            "PASSIVE": re.compile(
                rf"^(?P<arg1>.+?)\s+(?P<rel>{_AUX}(?:\s+been)?\s+\w+(?:ed|en|wn|t))\s+by\s+(?P<arg2>.+)$",
                re.IGNORECASE,
            ),
            "ACTIVE": re.compile(
                rf"^(?P<arg1>.+?)\s+(?P<rel>{_VERBS})(?:\s+(?P<arg2>.+))?$",
                re.IGNORECASE,
            ),
        }

    def extract(self, text: str) -> list[Extraction]:
        """Extract relations from text.

        Args:
            text: Input text to process.

        Returns:
            list[Extraction]: At most one extraction per sentence, in sentence order.
        """
        if not text or not text.strip():
            return []

        extractions = []
        for sentence in _SENTENCE_SPLIT.split(text.strip()):
            extraction = self._extract_sentence(sentence.strip().rstrip(".!?").strip())
            if extraction is not None:
                extractions.append(extraction)

        return extractions

    def _extract_sentence(self, sentence: str) -> Extraction | None:
        if not sentence:
            return None

        # "John said that X" -> extract from X with context "John said"
        context_match = _CONTEXT.match(sentence)
        if context_match:
            extraction = self._match_patterns(
                context_match.group("rest"), context_match.group("context")
            )
            if extraction is not None:
                return extraction

        return self._match_patterns(sentence, "")

    def _match_patterns(self, sentence: str, context: str) -> Extraction | None:
        for kind, pattern in self.patterns.items():
            match = pattern.match(sentence)
            if not match:
                continue

            subject = match.group("arg1").strip()
            relation = " ".join(match.group("rel").split())
            objects = self._split_objects(match.group("arg2"))

            if kind == "PASSIVE":
                relation = f"{relation} by"

            return Extraction(
                confidence=self._score(kind, objects, context),
                context=context,
                negated=kind == "NEGATED",
                passive=kind == "PASSIVE",
                triple_text=Extraction.render_triple(subject, relation, objects),
                relation=relation,
                subject=subject,
                objects=objects,
            )

        return None

    @staticmethod
    def _split_objects(arg2: str | None) -> tuple[str, ...]:
        """Split the trailing argument at prepositions.

        "a speech on Tuesday" -> ("a speech", "on Tuesday")
        """
        if not arg2:
            return ()
        parts = [part.strip() for part in _OBJECT_SPLIT.split(arg2.strip())]
        return tuple(part for part in parts if part)

    @staticmethod
    def _score(kind: str, objects: tuple[str, ...], context: str) -> float:
        score = {"NEGATED": 0.6, "PASSIVE": 0.7, "ACTIVE": 0.75}[kind]
        if not objects:
            score -= 0.2
        if context:
            score -= 0.1
        return round(score, 2)


__all__ = ["PatternExtractionEngine"]
