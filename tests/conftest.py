import pytest
from click.testing import CliRunner

from micron_markup.models import Alignment, ParserState
from micron_markup.styles import DARK_THEME


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def state() -> ParserState:
    """Fresh parser state using the dark theme and left alignment."""
    return ParserState.initial(DARK_THEME.plain, Alignment.LEFT)
