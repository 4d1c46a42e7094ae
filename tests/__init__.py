"""
Test Package

Contains unit tests for all modules.
Run with: pytest tests/ -v

Test files follow the pattern:
    test_<module_name>.py

Example:
    tests/test_parser.py       - Tests for cubby/data/reabank_parser.py
    tests/test_classifier.py   - Tests for cubby/rules/classifier.py
    tests/test_generator.py    - Tests for cubby/project/rpp_generator.py
"""
