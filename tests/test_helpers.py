"""辅助函数测试"""

import pytest

from talenthub.utils.helpers import (
    decode_data_uri, encode_data_uri, extract_json_object,
    guess_media_type, load_document, truncate_text,
)
from talenthub.utils.logger import _redact

from conftest import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE, RESUME_BYTES


def test_data_uri_round_trip():
    uri = encode_data_uri(RESUME_BYTES, PDF_MEDIA_TYPE)

    assert uri.startswith("data:application/pdf;base64,")
    assert decode_data_uri(uri) == (PDF_MEDIA_TYPE, RESUME_BYTES)


def test_data_uri_media_type_lowercased_and_params_allowed():
    media_type, content = decode_data_uri("data:Image/PNG;name=cert.png;base64,aGVsbG8=")
    assert media_type == "image/png"
    assert content == b"hello"


@pytest.mark.parametrize("uri", [
    "application/pdf;base64,aGVsbG8=",
    "data:application/pdf,hello",
    "data:application/pdf;base64,not base64!",
])
def test_invalid_data_uri(uri):
    with pytest.raises(ValueError):
        decode_data_uri(uri)


def test_extract_json_object():
    assert extract_json_object('Here you go:\n```json\n{"score": 90}\n```') == {"score": 90}

    with pytest.raises(ValueError):
        extract_json_object("no json here")


def test_truncate_text():
    assert truncate_text("abcdefghij", 6) == "abc..."
    assert truncate_text("short", 10) == "short"


def test_load_document(tmp_path):
    resume = tmp_path / "resume.docx"
    resume.write_bytes(b"PK\x03\x04")

    assert guess_media_type(resume) == DOCX_MEDIA_TYPE
    assert load_document(resume) == {"content": b"PK\x03\x04", "media_type": DOCX_MEDIA_TYPE}
    assert load_document(resume, media_type="application/pdf")["media_type"] == "application/pdf"


def test_log_messages_mask_secrets():
    record = {"message": "HTTP 400 for https://identitytoolkit.googleapis.com/v1/accounts:signUp?key=AIzaSecret123 "
                         "payload {'password': 'hunter22', 'idToken': 'tok'}"}

    _redact(record)

    assert "AIzaSecret123" not in record["message"]
    assert "hunter22" not in record["message"]
    assert "key=***" in record["message"]
