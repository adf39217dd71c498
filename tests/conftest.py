from __future__ import annotations

from pathlib import Path

import pytest

from beamdoc.models import TupleTerm, atom
from tests._fixtures.beam_builder import BeamBuilder, doc_map, docs_term, entry


@pytest.fixture
def beam_builder(tmp_path: Path) -> BeamBuilder:
    """Provide a builder writing BEAM files under the pytest tmp_path."""
    return BeamBuilder(tmp_path)


@pytest.fixture
def demo_term() -> TupleTerm:
    """A small docs_v1 term with a visible function, a type and a hidden function."""
    return docs_term(
        doc_map("Demo module.\n\nLonger description of `add/2`."),
        [
            entry(
                "function",
                "add",
                2,
                signatures=["add(A, B) -> C"],
                doc=doc_map("Adds two numbers.\n\nSee `lists:sum/1`."),
            ),
            entry("type", "opt", 0, signatures=["opt() :: atom()"], doc=doc_map("An option.")),
            entry("function", "secret", 1, doc=atom("hidden")),
        ],
    )
