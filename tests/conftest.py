"""Pytest configuration and shared fixtures for the mdtree test suite.

This module provides shared fixtures, test configuration, and helpers
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdtree.options import ParserOptions
from mdtree.scheduler import sequential_map

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def plain_options() -> ParserOptions:
    """Provide parser options without smartypants, so text comes back unchanged."""
    return ParserOptions(smartypants=False)


@pytest.fixture
def sequential_options() -> ParserOptions:
    """Provide parser options that assemble units in the calling thread."""
    return ParserOptions(smartypants=False, mapper=sequential_map)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a sample document touching every block kind.

    Returns
    -------
    str
        Standard sample document used across multiple tests.

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.
{: .intro}

## Section 2

Here is a list:

- Item 1
- Item 2
- Item 3

1. First item
2. Second item

> A quote
> over two lines

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|----------|:--------:|
| Row 1    | Data 1   |

<div class="note">
kept *as is*
</div>

<!-- a comment -->

***
"""
