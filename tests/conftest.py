import io
import subprocess

import pytest
from rich.console import Console


class FakeRunner:
    """Stands in for subprocess.run, replaying canned (returncode, stdout, stderr) results."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        outcome = self.results.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        returncode, stdout, stderr = outcome
        return subprocess.CompletedProcess(argv, returncode, stdout, stderr)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def fake_runner():
    return FakeRunner