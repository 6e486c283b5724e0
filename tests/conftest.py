"""Shared fixtures: Django settings and isolated block registries."""

from __future__ import annotations

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ComposerProject.settings")
django.setup()

from composer.blocks import register_core_blocks  # noqa: E402
from composer.registry import BlockRegistry  # noqa: E402


@pytest.fixture
def registry() -> BlockRegistry:
    """A fresh registry with only the core block types."""
    return register_core_blocks(BlockRegistry())


@pytest.fixture
def empty_registry() -> BlockRegistry:
    """A fresh registry without any block types."""
    return BlockRegistry()
