"""Translation phase and the public ``translate`` pipeline."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .aggregator import aggregate
from .exceptions import EmptyInput, TranslationFailed
from .fingerprint import FingerprintGenerator
from .jobs import build_jobs
from .models import Job, JobsResult, PhaseResult, TranslationResult
from .segmentation import SegmentationPhase
from .serializer import decode_response, format_post_string
from .transport import AiohttpTransport, Transport
from ..utils.config import ClientSettings

JOBS_METHOD = "LMT_handle_jobs"


def split_target_lang(target_lang: str) -> Tuple[str, Optional[str]]:
    """``"EN-US"`` -> ``("EN", "EN-US")``; ``"RU"`` -> ``("RU", None)``."""
    parts = target_lang.split("-")
    if len(parts) > 1:
        return parts[0], target_lang
    return target_lang, None


def build_jobs_request(jobs: List[Job], source_lang: str, target_lang: str,
                       request_id: int, timestamp: int) -> Dict[str, Any]:
    base_lang, regional_variant = split_target_lang(target_lang)
    common_params: Dict[str, Any] = {"mode": "translate"}
    if regional_variant:
        common_params["regionalVariant"] = regional_variant
    return {
        "jsonrpc": "2.0",
        "method": JOBS_METHOD,
        "id": request_id,
        "params": {
            "jobs": [job.to_payload() for job in jobs],
            "lang": {
                "source_lang_user_selected": source_lang.upper(),
                "target_lang": base_lang.upper(),
            },
            "priority": 1,
            "commonJobParams": common_params,
            "timestamp": timestamp,
        },
    }


class TranslationPhase:
    def __init__(self, transport: Transport, fingerprint: Optional[FingerprintGenerator] = None):
        self.transport = transport
        self.fingerprint = fingerprint or FingerprintGenerator()
        self.logger = logging.getLogger(self.__class__.__name__)

    async def run(self, text: str, jobs: List[Job], source_lang: str, target_lang: str,
                  dl_session: str = "", proxy: str = "") -> Tuple[int, PhaseResult[JobsResult]]:
        """Send the jobs; returns the request id together with the outcome.

        ``text`` is the full original input: the timestamp is derived from it,
        never from individual job texts.
        """
        request = build_jobs_request(
            jobs, source_lang, target_lang,
            request_id=self.fingerprint.request_id(),
            timestamp=self.fingerprint.timestamp(text),
        )
        request_id = request["id"]
        self.logger.debug(f"{JOBS_METHOD} id={request_id} jobs={len(jobs)} ts={request['params']['timestamp']}")

        raw = await self.transport.call(JOBS_METHOD, format_post_string(request),
                                        dl_session=dl_session, proxy=proxy)
        try:
            result = JobsResult.from_payload(decode_response(raw, TranslationFailed), job_count=len(jobs))
        except TranslationFailed as e:
            self.logger.warning(f"Translation failed: {e}")
            return request_id, PhaseResult.fail(e)
        return request_id, PhaseResult.ok(result)


class LMTTranslator:
    """Runs segmentation, job construction, translation and aggregation in order.

    Holds no per-call state, so one instance can serve concurrent calls.
    """

    def __init__(self, transport: Optional[Transport] = None, settings: Optional[ClientSettings] = None,
                 rng=None, clock=None):
        self.transport = transport or AiohttpTransport(settings)
        self.fingerprint = FingerprintGenerator(rng=rng, clock=clock)
        self.segmentation = SegmentationPhase(self.transport, self.fingerprint)
        self.translation = TranslationPhase(self.transport, self.fingerprint)
        self.logger = logging.getLogger(self.__class__.__name__)

    async def close(self):
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False

    async def try_translate(self, text: str, source_lang: str = "auto", target_lang: str = "RU",
                            tag_handling: str = "", dl_session: str = "",
                            proxy: str = "") -> PhaseResult[TranslationResult]:
        """Like ``translate`` but expected failures come back as a failed result.

        The server's detected language always wins over ``source_lang``.
        Transport errors (including ``ServerError``) still raise.
        """
        if not text:
            return PhaseResult.fail(EmptyInput("No text to translate"))

        split = await self.segmentation.run(text, tag_handling, proxy=proxy)
        if not split.success:
            return PhaseResult.fail(split.error)
        detected = split.value.detected_lang
        if source_lang.lower() not in ("auto", detected.lower()):
            self.logger.debug(f"Requested source {source_lang}, server detected {detected}")

        jobs = build_jobs(split.value.chunks)
        request_id, translated = await self.translation.run(
            text, jobs, detected, target_lang, dl_session=dl_session, proxy=proxy)
        if not translated.success:
            return PhaseResult.fail(translated.error)

        merged = aggregate(translated.value.translations)
        if not merged.success:
            return PhaseResult.fail(merged.error)
        data, alternatives = merged.value

        self.logger.debug(f"Translated {len(jobs)} chunks {detected} -> {target_lang}, "
                          f"{len(alternatives)} alternatives")
        return PhaseResult.ok(TranslationResult(
            id=request_id,
            data=data,
            alternatives=alternatives,
            source_lang=detected,
            target_lang=target_lang,
            method="Pro" if dl_session else "Free",
        ))

    async def translate(self, text: str, source_lang: str = "auto", target_lang: str = "RU",
                        tag_handling: str = "", dl_session: str = "", proxy: str = "") -> TranslationResult:
        result = await self.try_translate(text, source_lang, target_lang, tag_handling, dl_session, proxy)
        return result.unwrap()


async def translate(text: str, source_lang: str = "auto", target_lang: str = "RU", tag_handling: str = "",
                    dl_session: str = "", proxy: str = "",
                    settings: Optional[ClientSettings] = None) -> TranslationResult:
    """Translate ``text`` with a throwaway client on the default transport."""
    if not text:
        raise EmptyInput("No text to translate")
    async with LMTTranslator(settings=settings) as translator:
        return await translator.translate(text, source_lang, target_lang, tag_handling, dl_session, proxy)
