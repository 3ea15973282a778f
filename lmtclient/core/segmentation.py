"""Segmentation phase: ``LMT_split_text``."""

import logging
from typing import Any, Dict, Optional

from .exceptions import SegmentationFailed
from .fingerprint import FingerprintGenerator
from .models import PhaseResult, SplitResult
from .serializer import decode_response, format_post_string
from .transport import Transport

SPLIT_METHOD = "LMT_split_text"
MARKUP_TAG_HANDLING = ("html", "xml")


def is_rich_text(text: str) -> bool:
    return "<" in text and ">" in text


def build_split_request(text: str, tag_handling: str, request_id: int) -> Dict[str, Any]:
    rich = tag_handling in MARKUP_TAG_HANDLING or is_rich_text(text)
    return {
        "jsonrpc": "2.0",
        "method": SPLIT_METHOD,
        "id": request_id,
        "params": {
            "texts": [text],
            "lang": {"lang_user_selected": "auto"},
            "splitting": "newlines",
            "text_type": "richtext" if rich else "plaintext",
        },
    }


class SegmentationPhase:
    def __init__(self, transport: Transport, fingerprint: Optional[FingerprintGenerator] = None):
        self.transport = transport
        self.fingerprint = fingerprint or FingerprintGenerator()
        self.logger = logging.getLogger(self.__class__.__name__)

    async def run(self, text: str, tag_handling: str = "", proxy: str = "") -> PhaseResult[SplitResult]:
        """Split ``text`` into chunks. Transport errors propagate unchanged."""
        request = build_split_request(text, tag_handling, self.fingerprint.request_id())
        self.logger.debug(f"{SPLIT_METHOD} id={request['id']} text_type={request['params']['text_type']}")

        raw = await self.transport.call(SPLIT_METHOD, format_post_string(request), proxy=proxy)
        try:
            split = SplitResult.from_payload(decode_response(raw, SegmentationFailed))
        except SegmentationFailed as e:
            self.logger.warning(f"Segmentation failed: {e}")
            return PhaseResult.fail(e)

        self.logger.debug(f"Segmented into {len(split.chunks)} chunks, detected={split.detected_lang}")
        return PhaseResult.ok(split)
