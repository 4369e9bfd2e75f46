"""Tests for log sanitizers"""
from promocart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging


def test_get_logger_is_cached():
    assert get_logger("promocart.cart") is get_logger("promocart.cart")


def test_sanitize_id_truncates_and_escapes():
    assert sanitize_id_for_logging("user-1234567890") == "user-123"
    assert sanitize_id_for_logging("a\nb") == "a\\nb"
    assert sanitize_id_for_logging(None) == "N/A"


def test_sanitize_string_blocks_forged_lines():
    """Test a cart key with a newline cannot start a fake log record"""
    assert sanitize_string_for_logging("promo-cart\nINFO - fake") == "promo-cart\\nINFO - fake"
    assert sanitize_string_for_logging("x" * 60) == "x" * 50 + "..."
    assert sanitize_string_for_logging("") == "N/A"
