import asyncio
import json

import pytest

from lmtclient.core.exceptions import SegmentationFailed, ServerError
from lmtclient.core.fingerprint import FingerprintGenerator
from lmtclient.core.models import SplitResult
from lmtclient.core.segmentation import SegmentationPhase, build_split_request, is_rich_text
from fakes import FakeTransport, FixedRandom, split_response


@pytest.mark.parametrize("text,tag_handling,expected", [
    ("Hello", "", "plaintext"),
    ("Hello", "html", "richtext"),
    ("Hello", "xml", "richtext"),
    ("<b>Hello</b>", "", "richtext"),
    ("a > b", "", "plaintext"),
    ("a < b", "", "plaintext"),
    ("b > a < c", "", "richtext"),
])
def test_text_type(text, tag_handling, expected):
    request = build_split_request(text, tag_handling, 1000)
    assert request["params"]["text_type"] == expected
    assert is_rich_text(text) == ("<" in text and ">" in text)


def test_split_request_shape():
    request = build_split_request("Hello", "", 8300001000)
    assert request == {
        "jsonrpc": "2.0",
        "method": "LMT_split_text",
        "id": 8300001000,
        "params": {
            "texts": ["Hello"],
            "lang": {"lang_user_selected": "auto"},
            "splitting": "newlines",
            "text_type": "plaintext",
        },
    }


def _phase(response):
    transport = FakeTransport({"LMT_split_text": response})
    return transport, SegmentationPhase(transport, FingerprintGenerator(rng=FixedRandom(8300001)))


def test_run_success_sends_serialized_body():
    transport, phase = _phase(split_response(["One.", "Two."], detected="DE"))
    result = asyncio.run(phase.run("One.\nTwo.", proxy="http://proxy:8080"))
    assert result.success
    assert result.value.detected_lang == "DE"
    assert [c.text for c in result.value.chunks] == ["One.", "Two."]

    call = transport.calls[0]
    assert call["method"] == "LMT_split_text"
    assert call["proxy"] == "http://proxy:8080"
    assert call["dl_session"] == ""
    assert '"method": "LMT_split_text"' in call["body"]
    assert json.loads(call["body"])["id"] == 8300001000


def test_run_missing_result():
    _, phase = _phase(json.dumps({"jsonrpc": "2.0", "error": {"code": 1042912}}))
    result = asyncio.run(phase.run("Hello"))
    assert not result.success
    assert isinstance(result.error, SegmentationFailed)
    with pytest.raises(SegmentationFailed):
        result.unwrap()


def test_run_invalid_json():
    _, phase = _phase("Too many requests")
    result = asyncio.run(phase.run("Hello"))
    assert isinstance(result.error, SegmentationFailed)


def test_run_propagates_transport_errors():
    _, phase = _phase(ServerError(429, "Too many requests"))
    with pytest.raises(ServerError):
        asyncio.run(phase.run("Hello"))


def test_missing_detected_language_fails():
    payload = json.loads(split_response(["Hi"]))
    del payload["result"]["lang"]["detected"]
    with pytest.raises(SegmentationFailed):
        SplitResult.from_payload(payload)


def test_empty_detection_fails():
    payload = json.loads(split_response(["Hi"], detected=""))
    with pytest.raises(SegmentationFailed):
        SplitResult.from_payload(payload)


@pytest.mark.parametrize("mutate", [
    lambda p: p["result"].pop("texts"),
    lambda p: p["result"].__setitem__("texts", []),
    lambda p: p["result"]["texts"][0].__setitem__("chunks", []),
    lambda p: p["result"]["texts"][0]["chunks"][0].__setitem__("sentences", []),
])
def test_malformed_chunks_fail(mutate):
    payload = json.loads(split_response(["Hi"]))
    mutate(payload)
    with pytest.raises(SegmentationFailed):
        SplitResult.from_payload(payload)


def test_missing_prefix_stays_missing():
    payload = json.loads(split_response(["Hi"]))
    del payload["result"]["texts"][0]["chunks"][0]["sentences"][0]["prefix"]
    sentence = SplitResult.from_payload(payload).chunks[0].sentence
    assert sentence.prefix is None
    assert "prefix" not in sentence.to_payload()
