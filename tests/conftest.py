"""
Pytest configuration for llmshim tests.

Registers the ``e2e`` marker and a ``--run-e2e`` switch for tests that talk
to locally running model servers (Ollama, LM Studio).
"""

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests against local model servers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "e2e: mark test as end-to-end (requires a local server, use --run-e2e to run)"
    )
    config.addinivalue_line("markers", "ollama: mark test as requiring a running Ollama server")
    config.addinivalue_line("markers", "lmstudio: mark test as requiring a running LM Studio")


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless --run-e2e is passed."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(reason="Need --run-e2e option to run end-to-end tests")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)
