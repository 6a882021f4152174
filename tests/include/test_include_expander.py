import logging
import textwrap
from pathlib import Path

from mdpanel.include.expander import IncludeExpander, expand_includes
from tests.infrastructure import write


def test_text_without_directives_is_unchanged(tmp_path: Path):
    text = "# Title\n\n<!-- just a comment -->\n\n```\n<!-- @include in code is still text? -->\n```\n"
    assert expand_includes(text, tmp_path / "doc.md") == text


def test_missing_file_gives_inline_diagnostic(tmp_path: Path):
    out = expand_includes('before\n<!-- @include "nope.md" -->\nafter', tmp_path / "doc.md")
    assert "include not found: nope.md" in out
    assert out.startswith("before\n<!-- ")
    assert out.endswith(" -->\nafter")


def test_missing_file_is_logged(tmp_path: Path, caplog_mdpanel):
    expand_includes('<!-- @include "nope.md" -->', tmp_path / "doc.md")
    assert any(r.levelno == logging.WARNING and "include not found" in r.getMessage()
               for r in caplog_mdpanel.records)


def test_nested_includes_resolve_relative_to_including_file(docs: Path):
    main = docs / "main.md"
    out = expand_includes(main.read_text(encoding="utf-8"), main)

    assert "Intro text." in out
    assert "> shared note" in out
    assert "@include" not in out
    assert out.index("Intro text.") < out.index("> shared note") < out.index("pip install it")


def test_section_with_level_shift(docs: Path):
    main = docs / "main.md"
    out = expand_includes(main.read_text(encoding="utf-8"), main)

    assert "### Install {#install .setup}" in out
    assert "#### From source" in out
    assert "clone it" in out
    # only the requested section
    assert "Usage" not in out
    assert "# Guide" not in out


def test_section_by_class(docs: Path):
    out = expand_includes('<!-- @include "guide.md{.tutorial}" -->', docs / "x.md")
    assert out == "## Usage {.tutorial}\n\nrun it\n\n"


def test_section_by_slug(docs: Path):
    out = expand_includes('<!-- @include "guide.md#api" -->', docs / "x.md")
    assert out == "## API\n\ncall it\n"


def test_section_not_found_diagnostic(docs: Path):
    out = expand_includes('x <!-- @include "guide.md#missing" --> y', docs / "x.md")
    assert out == "x <!-- section not found: missing in guide.md --> y"


def test_class_not_found_diagnostic(docs: Path):
    out = expand_includes('<!-- @include "guide.md{.nope}" -->', docs / "x.md")
    assert out == "<!-- section not found: .nope in guide.md -->"


def test_glob_concatenates_in_name_order(tmp_path: Path):
    for name, body in (("b.md", "BBB"), ("a.md", "AAA"), ("c.md", "CCC")):
        write(tmp_path / "parts" / name, body)
    out = expand_includes('<!-- @include "parts/*.md" -->', tmp_path / "doc.md")
    assert out == "AAA\nBBB\nCCC"


def test_glob_drops_empty_contributions(tmp_path: Path):
    write(tmp_path / "p" / "1.md", "one")
    write(tmp_path / "p" / "2.md", "")
    write(tmp_path / "p" / "3.md", "three")
    out = expand_includes('<!-- @include "p/*.md" -->', tmp_path / "doc.md")
    assert out == "one\nthree"


def test_glob_with_section_per_file(tmp_path: Path):
    write(tmp_path / "p" / "x.md", "## Keep\n\nk\n\n## Drop\n\nd\n")
    write(tmp_path / "p" / "y.md", "## Other\n")
    out = expand_includes('<!-- @include "p/*.md#keep" -->', tmp_path / "doc.md")
    assert out == "## Keep\n\nk\n\n\n<!-- section not found: keep in y.md -->"


def test_glob_directory_missing(tmp_path: Path):
    out = expand_includes('A <!-- @include "nodir/*.md" --> <!-- @include "b.md" -->', tmp_path / "doc.md")
    assert "<!-- include glob dir not found: nodir -->" in out
    # other directives are still processed
    assert "include not found: b.md" in out


def test_self_include_stops_at_depth_limit(tmp_path: Path):
    a = write(tmp_path / "a.md", 'x <!-- @include "a.md" -->')
    out = IncludeExpander(max_depth=3).expand(a.read_text(encoding="utf-8"), a)
    # top level + depths 1..3 expanded + one literal copy at depth 4
    assert out.count("x ") == 5
    assert out.count("@include") == 1


def test_two_file_cycle_terminates_with_default_limit(tmp_path: Path):
    a = write(tmp_path / "a.md", 'A\n<!-- @include "b.md" -->')
    write(tmp_path / "b.md", 'B\n<!-- @include "a.md" -->')
    out = expand_includes(a.read_text(encoding="utf-8"), a)
    assert out.startswith("A\nB\nA\nB")
    assert out.count("@include") == 1
    assert len(out) < 200


def test_zero_depth_expands_only_top_level(docs: Path):
    out = IncludeExpander(max_depth=0).expand('<!-- @include "parts/intro.md" -->', docs / "x.md")
    assert "Intro text." in out
    assert '<!-- @include "../shared/note.md" -->' in out


def test_without_file_uses_working_directory(tmp_path: Path):
    write(tmp_path / "n.md", "from cwd")
    assert expand_includes('<!-- @include "n.md" -->') == "from cwd"


def test_relative_current_file_is_made_absolute(tmp_path: Path):
    write(tmp_path / "sub" / "n.md", "sub note")
    assert expand_includes('<!-- @include "n.md" -->', "sub/doc.md") == "sub note"


def test_bom_is_stripped(tmp_path: Path):
    (tmp_path / "bom.md").write_bytes("\ufeffhello".encode("utf-8"))
    assert expand_includes('<!-- @include "bom.md" -->', tmp_path / "doc.md") == "hello"


def test_undecodable_file_counts_as_not_found(tmp_path: Path):
    (tmp_path / "bin.md").write_bytes(b"\xff\xfe\xfa\x00")
    out = expand_includes('<!-- @include "bin.md" -->', tmp_path / "doc.md")
    assert out == "<!-- include not found: bin.md -->"


def test_directory_target_counts_as_not_found(tmp_path: Path):
    (tmp_path / "dir.md").mkdir()
    out = expand_includes('<!-- @include "dir.md" -->', tmp_path / "doc.md")
    assert out == "<!-- include not found: dir.md -->"


def test_nested_section_and_level_compose(tmp_path: Path):
    write(tmp_path / "inner.md", textwrap.dedent("""\
        # Inner

        ## Part {#part}

        inner part
        """))
    write(tmp_path / "outer.md", textwrap.dedent("""\
        # Outer

        <!-- @include "inner.md#part" level=1 -->
        """))
    out = expand_includes('<!-- @include "outer.md" level=1 -->', tmp_path / "doc.md")
    assert "## Outer" in out
    assert "#### Part {#part}" in out
    assert "inner part" in out


def test_indented_section_heading_is_shifted(tmp_path: Path):
    write(tmp_path / "ind.md", "# Top\n\n   ## X\n\nx body\n")
    out = expand_includes('<!-- @include "ind.md#x" level=2 -->', tmp_path / "doc.md")
    assert out == "   #### X\n\nx body\n"
