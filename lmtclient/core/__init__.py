"""
Core module for lmt-client
==========================
"""

from .exceptions import (
    LMTClientError, TranslationError, EmptyInput, SegmentationFailed,
    TranslationFailed, EmptyTranslation, TransportError, ServerError
)
from .models import (
    Sentence, Chunk, Job, Beam, Translation, SplitResult, JobsResult,
    TranslationResult, PhaseResult
)
from .fingerprint import FingerprintGenerator, generate_request_id, get_timestamp, count_i
from .serializer import format_post_string
from .transport import Transport, AiohttpTransport
from .segmentation import SegmentationPhase
from .jobs import build_jobs
from .aggregator import aggregate
from .translator import TranslationPhase, LMTTranslator, translate

__all__ = [
    'LMTClientError', 'TranslationError', 'EmptyInput', 'SegmentationFailed',
    'TranslationFailed', 'EmptyTranslation', 'TransportError', 'ServerError',
    'Sentence', 'Chunk', 'Job', 'Beam', 'Translation', 'SplitResult', 'JobsResult',
    'TranslationResult', 'PhaseResult',
    'FingerprintGenerator', 'generate_request_id', 'get_timestamp', 'count_i',
    'format_post_string',
    'Transport', 'AiohttpTransport',
    'SegmentationPhase', 'build_jobs', 'aggregate',
    'TranslationPhase', 'LMTTranslator', 'translate',
]
