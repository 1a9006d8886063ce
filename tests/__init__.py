"""intlphone Test Suite.

Test organization mirrors the intlphone package:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_core/           # Config, logging, exceptions
    ├── test_engine/         # Tables, detection, normalization, validation, display
    ├── test_integrations/   # Location resolver and platforms
    ├── test_stress/         # Fuzzing and concurrency
    ├── test_phone.py        # App-facing functions
    └── test_cli.py          # Command line

Markers:
    - @pytest.mark.slow: Tests taking > 1 second
    - @pytest.mark.integration: Tests requiring external services
"""
