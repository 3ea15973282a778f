"""Merges per-chunk beams into the primary translation and its alternatives."""

from typing import List, Tuple

from .exceptions import EmptyTranslation
from .models import PhaseResult, Translation


def primary_text(translations: List[Translation]) -> str:
    return " ".join(t.beams[0].text for t in translations).strip()


def alternative_texts(translations: List[Translation]) -> List[str]:
    """One string per beam index of the first translation.

    Chunks are concatenated without a separator here, unlike ``primary_text``.
    Chunks lacking the beam index are skipped and empty results dropped.
    """
    if not translations:
        return []
    alternatives = []
    for i in range(len(translations[0].beams)):
        alt = "".join(t.beams[i].text for t in translations if i < len(t.beams))
        if alt:
            alternatives.append(alt)
    return alternatives


def aggregate(translations: List[Translation]) -> PhaseResult[Tuple[str, List[str]]]:
    """Expects translations already validated against the job count by ``JobsResult``."""
    data = primary_text(translations)
    if not data:
        return PhaseResult.fail(EmptyTranslation("No translation received"))
    return PhaseResult.ok((data, alternative_texts(translations)))
