import logging
import textwrap
from pathlib import Path

import pytest

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.file_utils import write


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    """Никаких внешних настроек: чистый env и рабочая директория во временной папке."""
    monkeypatch.delenv("MDPANEL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    """
    Небольшое дерево документов с вложенными include:

        main.md           → parts/intro.md, guide.md#install
        guide.md          (разделы Install / Usage / API)
        parts/intro.md    → ../shared/note.md
        parts/a.md, b.md, c.md
        shared/note.md
    """
    root = tmp_path / "docs"
    write(root / "main.md", textwrap.dedent("""\
        # Main

        <!-- @include "parts/intro.md" -->

        <!-- @include "guide.md#install" level=1 -->
        """))
    write(root / "guide.md", textwrap.dedent("""\
        # Guide

        ## Install {#install .setup}

        pip install it

        ### From source

        clone it

        ## Usage {.tutorial}

        run it

        ## API

        call it
        """))
    write(root / "parts" / "intro.md", "Intro text.\n\n<!-- @include \"../shared/note.md\" -->\n")
    write(root / "parts" / "a.md", "AAA")
    write(root / "parts" / "b.md", "BBB")
    write(root / "parts" / "c.md", "CCC")
    write(root / "shared" / "note.md", "> shared note\n")
    return root


@pytest.fixture
def caplog_mdpanel(caplog):
    caplog.set_level(logging.DEBUG, logger="mdpanel")
    return caplog
