from __future__ import annotations

import hashlib

import httpx

from hf_providers.base.models import Key
from hf_providers.huggingface import HuggingFaceProvider


def test_label_prefers_explicit_id():
    assert Key("hf_secret", id="primary").label == "primary"  # nosec B101
    assert Key.anonymous().label == "anonymous"  # nosec B101
    assert Key("").label == "anonymous"  # nosec B101


def test_label_never_contains_secret_characters():
    secret = "hf_abcdefghijklmnopWXYZ"
    label = Key(secret).label
    assert label == f"key-{hashlib.sha256(secret.encode('utf-8')).hexdigest()[:8]}"  # nosec B101
    assert "WXYZ" not in label and secret not in repr(Key(secret))  # nosec B101


def test_partial_failure_warning_hides_secret(fake_upstream):
    def _respond(request: httpx.Request) -> httpx.Response:
        if request.headers["Authorization"] == "Bearer hf_good_0001":
            return httpx.Response(200, json=[{"modelId": "org/chat", "pipeline_tag": "text-generation"}])
        return httpx.Response(401, json={"error": "invalid token"})

    fake_upstream.route("GET", "/api/models", _respond)
    page = HuggingFaceProvider().list_models([Key("hf_good_0001"), Key("hf_bad_9876")])
    assert len(page.warnings) == 1  # nosec B101
    assert "bad_9876" not in page.warnings[0].message  # nosec B101
    assert Key("hf_bad_9876").label in page.warnings[0].message  # nosec B101
