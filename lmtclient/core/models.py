"""
Data model
==========

Request entities (sentences, chunks, jobs), the response schemas the two
remote calls are validated against, and the public result type.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from .exceptions import SegmentationFailed, TranslationError, TranslationFailed

T = TypeVar("T")


@dataclass
class Sentence:
    id: int
    prefix: Optional[str]
    text: str

    def to_payload(self) -> Dict[str, Any]:
        # A prefix the server never sent stays off the wire
        if self.prefix is None:
            return {"id": self.id, "text": self.text}
        return {"id": self.id, "prefix": self.prefix, "text": self.text}


@dataclass
class Chunk:
    """A group of sentences produced by segmentation. Only the first one is used."""
    sentences: List[Sentence]

    @property
    def sentence(self) -> Sentence:
        return self.sentences[0]

    @property
    def text(self) -> str:
        return self.sentences[0].text


@dataclass
class Job:
    sentences: List[Sentence]
    context_before: List[str] = field(default_factory=list)
    context_after: List[str] = field(default_factory=list)
    kind: str = "default"
    preferred_num_beams: int = 1

    def to_payload(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "raw_en_context_before": list(self.context_before),
            "raw_en_context_after": list(self.context_after),
            "preferred_num_beams": self.preferred_num_beams,
            "sentences": [s.to_payload() for s in self.sentences],
        }


@dataclass
class Beam:
    sentences: List[str]

    @property
    def text(self) -> str:
        return " ".join(self.sentences)


@dataclass
class Translation:
    beams: List[Beam]


def _require(container: Any, key: str, error: Type[TranslationError], what: str) -> Any:
    if not isinstance(container, dict) or container.get(key) is None:
        raise error(f"{what}: missing '{key}'")
    return container[key]


@dataclass
class SplitResult:
    """Validated ``LMT_split_text`` result."""
    detected_lang: str
    chunks: List[Chunk]

    @classmethod
    def from_payload(cls, payload: Any) -> "SplitResult":
        result = _require(payload, "result", SegmentationFailed, "Segmentation response")
        lang = _require(result, "lang", SegmentationFailed, "Segmentation result")
        detected = _require(lang, "detected", SegmentationFailed, "Segmentation language block")
        if not detected:
            raise SegmentationFailed("Segmentation result: no source language detected")

        texts = _require(result, "texts", SegmentationFailed, "Segmentation result")
        if not isinstance(texts, list) or not texts:
            raise SegmentationFailed("Segmentation result: empty 'texts'")
        raw_chunks = _require(texts[0], "chunks", SegmentationFailed, "Segmentation text")
        if not isinstance(raw_chunks, list) or not raw_chunks:
            raise SegmentationFailed("Segmentation result: no chunks")

        chunks: List[Chunk] = []
        for idx, raw in enumerate(raw_chunks):
            raw_sentences = _require(raw, "sentences", SegmentationFailed, f"Chunk {idx}")
            if not isinstance(raw_sentences, list) or not raw_sentences:
                raise SegmentationFailed(f"Chunk {idx}: no sentences")
            sentences = []
            for s in raw_sentences:
                text = _require(s, "text", SegmentationFailed, f"Chunk {idx} sentence")
                sentences.append(Sentence(id=0, prefix=s.get("prefix"), text=text))
            chunks.append(Chunk(sentences))
        return cls(detected_lang=detected, chunks=chunks)


@dataclass
class JobsResult:
    """Validated ``LMT_handle_jobs`` result."""
    translations: List[Translation]

    @classmethod
    def from_payload(cls, payload: Any, job_count: int) -> "JobsResult":
        result = _require(payload, "result", TranslationFailed, "Translation response")
        raw_translations = _require(result, "translations", TranslationFailed, "Translation result")
        if not isinstance(raw_translations, list) or len(raw_translations) != job_count:
            got = len(raw_translations) if isinstance(raw_translations, list) else 0
            raise TranslationFailed(f"Translation result: expected {job_count} translations, got {got}")

        translations: List[Translation] = []
        for idx, raw in enumerate(raw_translations):
            raw_beams = _require(raw, "beams", TranslationFailed, f"Translation {idx}")
            if not isinstance(raw_beams, list) or not raw_beams:
                raise TranslationFailed(f"Translation {idx}: no beams")
            beams = []
            for b in raw_beams:
                raw_sentences = _require(b, "sentences", TranslationFailed, f"Translation {idx} beam")
                beams.append(Beam([
                    _require(s, "text", TranslationFailed, f"Translation {idx} sentence")
                    for s in raw_sentences
                ]))
            translations.append(Translation(beams))
        return cls(translations=translations)


@dataclass
class TranslationResult:
    id: int
    data: str
    alternatives: List[str]
    source_lang: str
    target_lang: str
    method: str
    code: int = 200

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        return {k: d[k] for k in ("code", "id", "data", "alternatives", "source_lang", "target_lang", "method")}


@dataclass
class PhaseResult(Generic[T]):
    """Outcome of one pipeline phase: either ``value`` or ``error``."""
    value: Optional[T] = None
    error: Optional[TranslationError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, value: T) -> "PhaseResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: TranslationError) -> "PhaseResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
