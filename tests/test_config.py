"""Tests for environment-driven settings."""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from publicdream_wiki.config import float_from_env


def test_unset_timeout_is_none(monkeypatch):
    monkeypatch.delenv("PUBLICDREAM_WIKI_TIMEOUT", raising=False)
    assert float_from_env("PUBLICDREAM_WIKI_TIMEOUT") is None


def test_empty_timeout_is_none(monkeypatch):
    monkeypatch.setenv("PUBLICDREAM_WIKI_TIMEOUT", "")
    assert float_from_env("PUBLICDREAM_WIKI_TIMEOUT") is None


def test_numeric_timeout(monkeypatch):
    monkeypatch.setenv("PUBLICDREAM_WIKI_TIMEOUT", "12.5")
    assert float_from_env("PUBLICDREAM_WIKI_TIMEOUT") == 12.5


def test_bad_timeout_names_the_variable(monkeypatch):
    monkeypatch.setenv("PUBLICDREAM_WIKI_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="PUBLICDREAM_WIKI_TIMEOUT"):
        float_from_env("PUBLICDREAM_WIKI_TIMEOUT")
