"""
Shared fixtures for the mersenne_hunt tests.

Output is captured by pointing the reporter's rich console at a StringIO.
"""

import io

import pytest
from rich.console import Console

from mersenne_hunt.messages import ALL, Reporter

KNOWN_EXPONENTS = [2, 3, 5, 7, 13, 17, 19, 31, 61, 89, 107, 127]


class CapturedReporter(Reporter):
    def __init__(self, trace_level=ALL):
        self.buffer = io.StringIO()
        console = Console(file=self.buffer, width=200, color_system=None)
        super().__init__(console, trace_level)

    @property
    def text(self):
        return self.buffer.getvalue()

    @property
    def lines(self):
        return self.text.splitlines()


@pytest.fixture
def reporter():
    return CapturedReporter()


@pytest.fixture
def known_exponents():
    return list(KNOWN_EXPONENTS)


@pytest.fixture
def make_reporter():
    return CapturedReporter
