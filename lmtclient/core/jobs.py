"""Turns segmentation chunks into translation jobs with neighbour context."""

from dataclasses import replace
from typing import List

from .models import Chunk, Job


def build_jobs(chunks: List[Chunk]) -> List[Job]:
    """One job per chunk, carrying the previous and next chunk text as context.

    Sentence ids are 1-based in chunk order.
    """
    jobs: List[Job] = []
    last = len(chunks) - 1
    for idx, chunk in enumerate(chunks):
        jobs.append(Job(
            sentences=[replace(chunk.sentence, id=idx + 1)],
            context_before=[chunks[idx - 1].text] if idx > 0 else [],
            context_after=[chunks[idx + 1].text] if idx < last else [],
        ))
    return jobs
