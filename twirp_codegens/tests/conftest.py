"""Unit tests configuration file."""

import os

import pytest

from twirp_codegens.generator.types import FileDescriptor

FIXTURE_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "fixtures")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def load_fixture(name: str) -> FileDescriptor:
    with open(os.path.join(FIXTURE_DIR, name), encoding="utf-8") as f:
        return FileDescriptor.from_json(f.read())


@pytest.fixture
def hello_file() -> FileDescriptor:
    """test.proto: HelloWorld.Speak(Words) returns (Words)."""
    return load_fixture("hello.json")


@pytest.fixture
def accounts_file() -> FileDescriptor:
    """acme/accounts.proto: sensitive fields, nested types, a cross-file method."""
    return load_fixture("accounts.json")


@pytest.fixture
def common_file() -> FileDescriptor:
    """acme/common.proto: messages only, no services."""
    return load_fixture("common.json")
