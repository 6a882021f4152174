from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Settings, load_settings
from .display import create_display
from .errors import ExportError, MdPanelUserError
from .include.expander import IncludeExpander
from .render.pipeline import RenderPipeline, RenderResult, export_html
from .render.supervisor import RenderSupervisor
from .version import tool_version

logger = logging.getLogger("mdpanel")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdpanel",
        description="Markdown preview with @include composition",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--config", metavar="PATH", help="файл настроек (по умолчанию ./mdpanel.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="подробный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_expand = sub.add_parser("expand", help="Markdown с раскрытыми @include")
    sp_expand.add_argument("file", help="исходный файл или - для stdin")

    sp_render = sub.add_parser("render", help="HTML-страница (display-вариант) в stdout")
    sp_render.add_argument("file", help="исходный файл или - для stdin")
    sp_render.add_argument("--export", action="store_true", help="печатать export-вариант без скриптов")

    sp_export = sub.add_parser("export", help="записать переносимый HTML-файл")
    sp_export.add_argument("file", help="исходный Markdown-файл")
    sp_export.add_argument("-o", "--output", help="целевой .html (по умолчанию рядом с исходником)")

    sp_preview = sub.add_parser("preview", help="следить за файлом и обновлять просмотр")
    sp_preview.add_argument("file", help="исходный Markdown-файл")
    sp_preview.add_argument("--interval", type=float, default=0.5, help="период опроса, сек")
    sp_preview.add_argument("--once", action="store_true", help="один цикл рендера и выход")

    return p


def _read_source(arg: str) -> tuple[str, Optional[Path]]:
    if arg == "-":
        return sys.stdin.read(), None
    path = Path(arg)
    if not path.is_file():
        raise MdPanelUserError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8"), path
    except (OSError, UnicodeDecodeError) as e:
        raise MdPanelUserError(f"Cannot read {path}: {e}") from e


def _auto_export(settings: Settings, result: RenderResult) -> None:
    if not settings.html_file:
        return
    # a failed auto-export stops only this export, not the render
    try:
        export_html(result, settings.html_file)
    except ExportError as e:
        logger.warning("auto-export skipped: %s", e)


def _run_preview(settings: Settings, path: Path, interval: float, once: bool) -> int:
    """
    Poll loop on the main (interactive) thread. Renders run in the
    supervisor's worker; results are applied to the display here.
    """
    pipeline = RenderPipeline(settings)
    display = create_display(settings)

    def deliver(result: RenderResult) -> None:
        kind = display.set_content(result)
        display.set_zoom(settings.zoom_level)
        _auto_export(settings, result)
        logger.info("preview updated (%s)", kind.value)

    def on_error(exc: BaseException) -> None:
        sys.stderr.write(f"Render failed: {exc}\n")

    supervisor = RenderSupervisor(lambda text, p: pipeline.render(text, p), deliver, on_error=on_error)
    last_mtime: Optional[float] = None
    try:
        while True:
            try:
                mtime = path.stat().st_mtime
            except OSError as e:
                raise MdPanelUserError(f"Cannot stat {path}: {e}") from e
            if mtime != last_mtime:
                text, _ = _read_source(str(path))
                # a dropped request is retried on the next tick: mtime is not consumed
                if supervisor.request(text, path):
                    last_mtime = mtime
            if once:
                supervisor.wait_idle()
                supervisor.process_pending()
                return 0
            supervisor.process_pending(timeout=interval)
    except KeyboardInterrupt:
        return 0
    finally:
        supervisor.shutdown()


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        settings = load_settings(ns.config)

        if ns.cmd == "expand":
            text, path = _read_source(ns.file)
            expander = IncludeExpander(max_depth=settings.include_max_depth)
            sys.stdout.write(expander.expand(text, path))
            return 0

        if ns.cmd == "render":
            text, path = _read_source(ns.file)
            result = RenderPipeline(settings).render(text, path)
            _auto_export(settings, result)
            sys.stdout.write(result.html_for_export if ns.export else result.html_for_display)
            return 0

        if ns.cmd == "export":
            if ns.file == "-":
                raise MdPanelUserError("export needs a source file, not stdin")
            text, path = _read_source(ns.file)
            result = RenderPipeline(settings).render(text, path)
            target = Path(ns.output) if ns.output else path.with_suffix(".html")
            export_html(result, target)
            sys.stderr.write(f"Exported to: {target}\n")
            return 0

        if ns.cmd == "preview":
            path = Path(ns.file)
            if not path.is_file():
                raise MdPanelUserError(f"File not found: {path}")
            return _run_preview(settings, path, ns.interval, ns.once)

    except MdPanelUserError as e:
        sys.stderr.write(f"Error: {str(e).rstrip()}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
