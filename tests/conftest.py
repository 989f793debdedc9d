"""Pytest configuration and shared fixtures for the dom2md test suite."""

import io
import logging
import os

import pytest

from dom2md import ConvertOptions

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed; property tests are skipped via importorskip
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def options() -> ConvertOptions:
    """Default conversion options."""
    return ConvertOptions()


@pytest.fixture
def raw_options() -> ConvertOptions:
    """Options that keep whitespace and skip escaping."""
    return ConvertOptions(trim_space=False, escape_special=False)


@pytest.fixture
def buffer() -> io.StringIO:
    """Empty text sink."""
    return io.StringIO()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handler changes made by CLI tests."""
    package_logger = logging.getLogger("dom2md")
    handlers = list(package_logger.handlers)
    level, propagate = package_logger.level, package_logger.propagate
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def sample_document() -> str:
    """A small article exercising most built-in rules."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Sample</title>
    <style>body { color: red; }</style>
</head>
<body>
    <h1>Main Heading</h1>
    <p>This is a paragraph with <strong>bold text</strong>, <em>italic text</em>, and <code>inline code</code>.</p>
    <ul>
        <li>First item</li>
        <li>Second item
            <ul>
                <li>Nested item</li>
            </ul>
        </li>
    </ul>
    <pre><code class="language-python">print("hi")</code></pre>
    <table>
        <tr><th>Name</th><th>Value</th></tr>
        <tr><td>a</td><td>1</td></tr>
        <tr><td>b</td><td>2</td></tr>
    </table>
    <!-- a comment -->
    <script>alert("x")</script>
</body>
</html>"""
