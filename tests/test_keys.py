"""
Tests for cache key derivation.
"""

import hashlib

from ai_gateway.utils import derive_exact_key, derive_service_key, normalize_question


def test_exact_key_ignores_case_and_outer_whitespace():
    assert derive_exact_key(" What is APR? ") == derive_exact_key("what is apr?")


def test_exact_key_keeps_internal_whitespace():
    assert derive_exact_key("what is  apr?") != derive_exact_key("what is apr?")


def test_exact_key_is_sha256_hex_of_normalized_text():
    expected = hashlib.sha256("что такое kyc?".encode("utf-8")).hexdigest()
    assert derive_exact_key("  Что такое KYC?\n") == expected
    assert len(expected) == 64


def test_normalize_question():
    assert normalize_question("\t Hello World \n") == "hello world"


def test_service_key_format():
    digest = hashlib.sha256(b"chatbot:hello").hexdigest()
    assert derive_service_key("chatbot", "hello") == f"llm_cache:chatbot:{digest}"


def test_service_key_separates_services():
    assert derive_service_key("chatbot", "hello") != derive_service_key("assistant", "hello")


def test_service_key_is_stable_and_case_sensitive():
    assert derive_service_key("chatbot", "Hello") == derive_service_key("chatbot", "Hello")
    assert derive_service_key("chatbot", "Hello") != derive_service_key("chatbot", "hello")


def test_service_key_custom_namespace():
    assert derive_service_key("chatbot", "hello", namespace="staging").startswith("staging:chatbot:")
