"""Wire serialization of JSON-RPC request bodies."""

import json
import re
from typing import Any, Dict, Type

from .exceptions import TranslationError

SURROGATE_RE = re.compile('[\ud800-\udfff]')

METHOD_KEY = '"method":"'
METHOD_SPACED = '"method" : "'
METHOD_DEFAULT = '"method": "'


def method_separator(request_id: int) -> str:
    """Spacing variant the server expects after the ``method`` key for this id."""
    if (request_id + 5) % 29 == 0 or (request_id + 3) % 13 == 0:
        return METHOD_SPACED
    return METHOD_DEFAULT


def _escape_lone_surrogates(body: str) -> str:
    # Split pairs are joined back into one code point; whatever is left is unpaired
    body = body.encode('utf-16', 'surrogatepass').decode('utf-16', 'surrogatepass')
    return SURROGATE_RE.sub(lambda m: '\\u%04x' % ord(m.group()), body)


def canonical_json(payload: Dict[str, Any]) -> str:
    # Same bytes as a browser's JSON.stringify: no whitespace, raw unicode,
    # unpaired surrogates written as \udxxx escapes
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    if SURROGATE_RE.search(body):
        body = _escape_lone_surrogates(body)
    return body


def format_post_string(payload: Dict[str, Any]) -> str:
    """Serialize ``payload`` and rewrite the first ``"method":"`` occurrence.

    Only that one substring differs from compact JSON; the rest of the body is
    left byte-for-byte as ``canonical_json`` produced it.
    """
    body = canonical_json(payload)
    return body.replace(METHOD_KEY, method_separator(payload["id"]), 1)


def decode_response(text: str, error_cls: Type[TranslationError]) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise error_cls(f"Response is not valid JSON: {e}") from e
