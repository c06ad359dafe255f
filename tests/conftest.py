"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from gambit.game.game import Game


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def game() -> Game:
    """A fresh game from the standard starting position."""
    return Game()


@pytest.fixture
def empty_game() -> Game:
    """A game on an empty board, to be set up with ``place_piece``."""
    return Game(standard=False)
