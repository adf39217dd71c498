"""Tests for heading and link conversion into Info markup."""

from __future__ import annotations

import pytest

from beamdoc.postproc import convert_headings, convert_links, render, resolve_link_target
from beamdoc.postproc.links import FULLWIDTH_COLON, CrossReference, LinkKind, LinkTarget, escape_label


def test_heading_underline_matches_title_length() -> None:
    assert convert_headings("## Title") == "Title\n====="


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("# Top", "Top\n***"),
        ("### Sub", "Sub\n---"),
        ("#### Deep", "Deep\n...."),
        ("###### Deeper", "Deeper\n......"),
    ],
)
def test_heading_underline_depends_on_depth(line: str, expected: str) -> None:
    assert convert_headings(line) == expected


def test_heading_pass_only_touches_heading_lines() -> None:
    text = "Intro\n## Usage\nCall it.\n#not-a-heading\n"
    assert convert_headings(text) == "Intro\nUsage\n=====\nCall it.\n#not-a-heading\n"


def test_heading_pass_keeps_crlf_line_endings() -> None:
    assert render("## Title\r\nBody") == "Title\r\n=====\r\nBody"
    assert convert_headings("# A\r\n# B") == "A\r\n*\r\nB\n*"


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("foo/1", LinkTarget(LinkKind.FUNCTION, "foo/1")),
        ("t:opt/0", LinkTarget(LinkKind.LOCAL, "opt/0")),
        ("c:init/1", LinkTarget(LinkKind.LOCAL, "init/1")),
        ("Upper/2", LinkTarget(LinkKind.LOCAL, "Upper/2")),
        ("lists:map/2", LinkTarget(LinkKind.REMOTE, "map/2", unit="lists")),
        ("t:erlang.timeout/0", LinkTarget(LinkKind.REMOTE, "timeout/0", unit="erlang")),
        ("m:gen_server", LinkTarget(LinkKind.MODULE, "Top", unit="gen_server")),
    ],
)
def test_resolve_link_target_shapes(target: str, expected: LinkTarget) -> None:
    assert resolve_link_target(target) == expected


@pytest.mark.parametrize("target", ["not a valid target", "ok", "e:guide.md", "m:a/b"])
def test_unresolvable_targets(target: str) -> None:
    assert resolve_link_target(target) is None


def test_target_spec_for_remote_units() -> None:
    assert LinkTarget(LinkKind.REMOTE, "map/2", unit="lists").spec == "(lists)map/2"
    assert LinkTarget(LinkKind.FUNCTION, "foo/1").spec == "foo/1"


def test_bare_link_defaults_to_comma() -> None:
    assert convert_links("`foo/1`") == "*note foo/1: foo/1,"
    assert convert_links("`lists:map/2`") == f"*note lists{FULLWIDTH_COLON}map/2: (lists)map/2,"
    assert convert_links("`m:gen_server`") == f"*note m{FULLWIDTH_COLON}gen_server: (gen_server)Top,"


def test_bare_link_keeps_trailing_punctuation() -> None:
    assert convert_links("See `foo/1`.") == "See *note foo/1: foo/1."
    assert convert_links("Use `t:opt/0`, then") == f"Use *note t{FULLWIDTH_COLON}opt/0: opt/0, then"


def test_labelled_link_uses_escaped_label() -> None:
    text = "Read [the map: function](`lists:map/2`) now."
    assert convert_links(text) == f"Read *note the map{FULLWIDTH_COLON} function: (lists)map/2 now."


def test_unresolved_links_render_as_inert_text() -> None:
    text = "Returns `not a valid target`, or [docs](`e:guide.md`)."
    assert convert_links(text) == text


def test_escape_label_replaces_every_colon() -> None:
    assert escape_label("a:b:c") == f"a{FULLWIDTH_COLON}b{FULLWIDTH_COLON}c"


def test_cross_reference_render() -> None:
    reference = CrossReference(
        target=LinkTarget(LinkKind.REMOTE, "map/2", unit="lists"),
        label="x:y",
        punctuation=".",
    )
    assert reference.render() == f"*note x{FULLWIDTH_COLON}y: (lists)map/2."


def test_render_runs_both_passes() -> None:
    text = "## See also\nCompare with `lists:map/2`."
    assert render(text) == (
        "See also\n========\n"
        f"Compare with *note lists{FULLWIDTH_COLON}map/2: (lists)map/2."
    )
