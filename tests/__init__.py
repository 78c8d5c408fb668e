"""
Safety Layer Tests

Unit tests live in tests/unit; tests/test_safety_integration.py runs the
pipeline end to end with Redis replaced by the in-memory fallback.

Running Tests:
    # Run everything
    pytest -v

    # Run the integration suite standalone
    python tests/test_safety_integration.py

    # Run specific test
    pytest tests/test_safety_integration.py::test_follow_up_flow -v

Test Coverage:
    - Lexicon validation and crisis classification
    - Locale-aware resource resolution
    - Assessment score flags
    - Intervention rendering and session records
    - Follow-up cooldown
    - HTTP endpoints
"""
