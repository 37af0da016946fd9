"""Shared fixtures: a configured Flask app, its test client and an EmitContext factory."""

import sys
from pathlib import Path

import pytest

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app import create_app
from config import Config
from core.context import EmitContext
from fakes import FakeBytecodeProbe


class AppTestConfig(Config):
    TESTING = True
    JSON_DEBUG = True
    SHOW_DETAILED_ERRORS = False


class NoDebugConfig(AppTestConfig):
    JSON_DEBUG = False


@pytest.fixture
def app():
    return create_app(AppTestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def no_debug_app():
    return create_app(NoDebugConfig)


@pytest.fixture
def make_context():
    """Factory for EmitContext; the bytecode probe reports the module as cached."""
    def _make(**overrides):
        fields = {"bytecode_probe": FakeBytecodeProbe(cached=True)}
        fields.update(overrides)
        return EmitContext(**fields)
    return _make
