"""
Tests for custom exceptions
"""
from showmatch.exceptions import (
    CandidateLookupError,
    ConfigurationError,
    InvalidInputError,
    SelectionError,
    ShowMatchError,
)


def test_base_exception():
    """Test base ShowMatchError"""
    error = ShowMatchError("Test error", "Test details")

    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == "Test details"

    error_dict = error.to_dict()
    assert error_dict["error"] == "ShowMatchError"
    assert error_dict["message"] == "Test error"
    assert error_dict["details"] == "Test details"


def test_base_exception_without_details():
    """Details are omitted from the dict when absent"""
    error_dict = ShowMatchError("Only a message").to_dict()

    assert "details" not in error_dict


def test_candidate_lookup_error():
    """Test CandidateLookupError"""
    error = CandidateLookupError("the office", "HTTP 503")

    assert "the office" in str(error)
    assert error.query == "the office"
    assert error.reason == "HTTP 503"
    assert error.details == "HTTP 503"


def test_invalid_input_error():
    """Test InvalidInputError"""
    error = InvalidInputError("/tmp/candidates.json")

    assert "/tmp/candidates.json" in str(error)
    assert error.path == "/tmp/candidates.json"
    assert "json" in error.details.lower()


def test_configuration_error():
    """Test ConfigurationError"""
    error = ConfigurationError("auto_select_min_score", "must be <= 1")

    assert "auto_select_min_score" in str(error)
    assert error.config_key == "auto_select_min_score"
    assert error.details == "must be <= 1"


def test_selection_error():
    """Test SelectionError"""
    error = SelectionError("the office", "999")

    assert "999" in str(error)
    assert error.query == "the office"
    assert error.candidate_id == "999"


def test_exception_inheritance():
    """Test that all exceptions inherit from ShowMatchError"""
    exceptions = [
        CandidateLookupError("query"),
        InvalidInputError("/test.json"),
        ConfigurationError("key"),
        SelectionError("query", "1"),
    ]

    for exc in exceptions:
        assert isinstance(exc, ShowMatchError)
        assert isinstance(exc, Exception)
