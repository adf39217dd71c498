"""Tests for the shared documentation context and module resolver."""

from __future__ import annotations

from pathlib import Path

import pytest

from beamdoc.config import BeamDocConfig, CacheConfig
from beamdoc.context import DocContext, ModuleResolver


def test_resolver_searches_paths_in_order(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "lists.beam").write_bytes(b"")

    resolver = ModuleResolver([first, second])

    assert resolver.resolve("lists") == second / "lists.beam"


def test_resolver_memoizes_until_reset(tmp_path: Path) -> None:
    resolver = ModuleResolver([tmp_path])
    with pytest.raises(FileNotFoundError):
        resolver.resolve("late")

    (tmp_path / "late.beam").write_bytes(b"")
    with pytest.raises(FileNotFoundError):
        resolver.resolve("late")

    resolver.reset()
    assert resolver.resolve("late") == tmp_path / "late.beam"


def test_context_loads_by_module_name_and_path(beam_builder, demo_term, tmp_path: Path) -> None:
    path = beam_builder.write("demo", demo_term)
    context = DocContext(BeamDocConfig(root=tmp_path, search_paths=[beam_builder.root]))

    by_name = context.load("demo")
    by_path = context.load(str(path))

    assert by_name == by_path
    assert context.cache.decode_count == 1
    assert "Node: add/2" in context.render_unit("demo")
    assert context.render_node("demo", "opt/0").startswith("\x1f\nFile: demo,  Node: opt/0")


def test_context_reset_clears_cache_and_resolver(beam_builder, demo_term, tmp_path: Path) -> None:
    beam_builder.write("demo", demo_term)
    context = DocContext(BeamDocConfig(root=tmp_path, search_paths=[beam_builder.root]))
    context.load("demo")

    context.reset()

    assert len(context.cache) == 0
    context.load("demo")
    assert context.cache.decode_count == 2


def test_context_without_cache_decodes_every_time(beam_builder, demo_term, tmp_path: Path) -> None:
    path = beam_builder.write("demo", demo_term)
    config = BeamDocConfig(root=tmp_path, cache=CacheConfig(enabled=False))
    context = DocContext(config)

    context.load(str(path))
    context.load(str(path))

    assert context.cache.decode_count == 0


def test_missing_beam_path_is_reported(tmp_path: Path) -> None:
    context = DocContext(BeamDocConfig(root=tmp_path))
    with pytest.raises(FileNotFoundError):
        context.load(str(tmp_path / "absent.beam"))
