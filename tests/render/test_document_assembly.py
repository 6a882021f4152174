from pathlib import Path

from mdpanel.render.document import (
    MATHJAX_SCRIPT,
    MERMAID_SCRIPT,
    USER_STYLE_ID,
    assemble_document,
    build_display_document,
    build_export_document,
    head_injections,
    inject_into_head,
    make_base_href,
    unsupported_extension_body,
)
from tests.infrastructure import write


def test_assemble_document_skeleton():
    page = assemble_document("<p>hi</p>", title="a<b>.md", style_css="p { color: red; }")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>a&lt;b&gt;.md</title>" in page
    assert f'id="{USER_STYLE_ID}"' in page
    assert "p { color: red; }" in page
    assert '<body class="markdown-body" style="">' in page
    assert "<p>hi</p>" in page


def test_braces_in_body_and_style_are_kept():
    page = assemble_document("<p>{x}</p>", title="", style_css="a{b:c}")
    assert "<p>{x}</p>" in page
    assert "a{b:c}" in page


def test_base_href_for_existing_file(tmp_path: Path):
    src = write(tmp_path / "dir with space" / "doc.md", "x")
    href = make_base_href(src)
    expected = (tmp_path / "dir with space").as_uri() + "/"
    assert href == f'<base href="{expected}">'
    assert "%20" in href


def test_base_href_empty_without_file(tmp_path: Path):
    assert make_base_href(None) == ""
    assert make_base_href(tmp_path / "missing.md") == ""
    assert make_base_href(tmp_path) == ""


def test_head_injections_order(tmp_path: Path):
    src = write(tmp_path / "doc.md", "x")
    frag = head_injections(src)
    assert frag.index("<base href") < frag.index(MATHJAX_SCRIPT) < frag.index(MERMAID_SCRIPT)


def test_inject_into_head_is_case_insensitive():
    assert inject_into_head("<HEAD></HEAD><body/>", "<x/>") == "<HEAD><x/></HEAD><body/>"


def test_inject_without_head_prepends_one():
    assert inject_into_head("<body/>", "<x/>") == "<head><x/></head><body/>"


def test_display_and_export_variants(tmp_path: Path):
    src = write(tmp_path / "doc.md", "x")
    display = build_display_document("<p>b</p>", title="doc.md", style_css="", source_path=src)
    export = build_export_document("<p>b</p>", title="doc.md", style_css="")
    assert "<script" in display
    assert "<script" not in export
    assert "<base href" not in export
    assert display.replace(head_injections(src), "") == export


def test_unsupported_extension_body_escapes():
    body = unsupported_extension_body("<x>.rst", "md,txt")
    assert "<u>&lt;x&gt;.rst</u>" in body
    assert "has no valid Markdown file extension" in body
    assert "md,txt" in body
