"""spaCy dependency-parse extraction engine.

Builds extractions from the dependency tree of each sentence:

- every verb (or copular auxiliary) with a nominal subject yields one extraction;
- the relation is the verb with its auxiliaries, negation and particles;
- objects are the direct object / attribute followed by prepositional phrases;
- ``nsubjpass``/``auxpass`` mark passive extractions, and a "by" agent becomes
  an object with "by" appended to the relation;
- a clause governed by a reporting verb ("John said that ...") carries
  "John said" as its context.
"""

from __future__ import annotations

import logging

import spacy
from spacy.language import Language
from spacy.tokens import Span, Token

from packages.schemas.extraction import Extraction

logger = logging.getLogger(__name__)

SUBJECT_DEPS = ("nsubj", "nsubjpass", "csubj")
OBJECT_DEPS = ("dobj", "obj", "attr", "acomp", "oprd", "dative")
RELATION_DEPS = ("aux", "auxpass", "neg", "prt")
CLAUSE_DEPS = ("ccomp",)


class EngineInitializationError(RuntimeError):
    """Raised when the spaCy pipeline cannot be loaded."""

    pass


class SpacyExtractionEngine:
    """Open information extraction over spaCy dependency parses.

    The pipeline is loaded once; spaCy inference is safe to call from the
    server's worker threads.
    """

    name = "spacy"

    def __init__(self, model: str = "en_core_web_sm", nlp: Language | None = None) -> None:
        """Initialize the engine.

        Args:
            model: Installed spaCy pipeline name.
            nlp: Preloaded pipeline (skips loading ``model``).

        Raises:
            EngineInitializationError: If the model is not installed.
        """
        self.model = model
        if nlp is not None:
            self.nlp = nlp
            return

        try:
            self.nlp = spacy.load(model)
        except OSError as e:
            raise EngineInitializationError(
                f"spaCy model '{model}' is not installed; "
                f"run: python -m spacy download {model}"
            ) from e
        logger.info("Loaded spaCy pipeline", extra={"model": model})

    def extract(self, text: str) -> list[Extraction]:
        """Extract relations from text.

        Args:
            text: Input text to process.

        Returns:
            list[Extraction]: Extractions in sentence and token order.
        """
        if not text or not text.strip():
            return []

        doc = self.nlp(text)
        extractions: list[Extraction] = []
        for sent in doc.sents:
            extractions.extend(self._extract_from_sentence(sent))
        return extractions

    def _extract_from_sentence(self, sent: Span) -> list[Extraction]:
        extractions = []
        for token in sent:
            if token.pos_ not in ("VERB", "AUX"):
                continue
            # Auxiliaries attached to a main verb are part of its relation
            if token.pos_ == "AUX" and token.dep_ in RELATION_DEPS:
                continue

            subject = self._get_subject(token)
            if subject is None:
                continue

            extraction = self._build_extraction(token, subject)
            if extraction is not None:
                extractions.append(extraction)
        return extractions

    def _build_extraction(self, verb: Token, subject: Token) -> Extraction | None:
        passive = subject.dep_ == "nsubjpass" or any(
            child.dep_ == "auxpass" for child in verb.children
        )
        negated = any(child.dep_ == "neg" for child in verb.children)

        relation = self._relation_phrase(verb)
        objects = self._get_objects(verb)

        agent = self._get_agent(verb)
        if agent is not None:
            relation = f"{relation} by"
            objects.insert(0, agent)

        if not relation:
            return None

        subject_text = self._span_text(subject)
        context = self._get_context(verb)

        return Extraction(
            confidence=self._score(objects, passive, context),
            context=context,
            negated=negated,
            passive=passive,
            triple_text=Extraction.render_triple(subject_text, relation, objects),
            relation=relation,
            subject=subject_text,
            objects=tuple(objects),
        )

    @staticmethod
    def _span_text(token: Token) -> str:
        """Text of the token's full subtree, preserving original spacing."""
        doc = token.doc
        return doc[token.left_edge.i : token.right_edge.i + 1].text.strip()

    @staticmethod
    def _get_subject(verb: Token) -> Token | None:
        for child in verb.children:
            if child.dep_ in SUBJECT_DEPS:
                return child
        return None

    @staticmethod
    def _relation_phrase(verb: Token) -> str:
        tokens = [child for child in verb.children if child.dep_ in RELATION_DEPS]
        tokens.append(verb)
        tokens.sort(key=lambda t: t.i)
        return " ".join(t.text for t in tokens)

    def _get_objects(self, verb: Token) -> list[str]:
        objects = []
        for child in verb.children:
            if child.dep_ in OBJECT_DEPS:
                objects.append(self._span_text(child))

        # prepositional phrases keep their preposition: "on Tuesday"
        for child in verb.children:
            if child.dep_ == "prep" and child.text.lower() != "by":
                objects.append(self._span_text(child))
        return objects

    def _get_agent(self, verb: Token) -> str | None:
        for child in verb.children:
            if child.dep_ == "agent" or (child.dep_ == "prep" and child.text.lower() == "by"):
                for pobj in child.children:
                    if pobj.dep_ == "pobj":
                        return self._span_text(pobj)
        return None

    def _get_context(self, verb: Token) -> str:
        """Reporting clause governing ``verb``, e.g. "John said"."""
        if verb.dep_ not in CLAUSE_DEPS:
            return ""
        head = verb.head
        subject = self._get_subject(head)
        if subject is None:
            return ""
        return f"{self._span_text(subject)} {self._relation_phrase(head)}"

    @staticmethod
    def _score(objects: list[str], passive: bool, context: str) -> float:
        score = 0.9 if objects else 0.6
        if passive:
            score -= 0.05
        if context:
            score -= 0.1
        return round(score, 2)


__all__ = ["EngineInitializationError", "SpacyExtractionEngine"]
