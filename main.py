from __future__ import annotations

import argparse
import base64
import json
import logging
import mimetypes
import sys
from dataclasses import replace
from pathlib import Path

from anuvad.config import get_settings
from anuvad.errors import FallbackRenderError
from anuvad.layout.assembler import layout_document
from anuvad.layout.options import LayoutOptions
from anuvad.storage import read_text_input, write_bytes_atomic, write_json_atomic
from anuvad.types import RenderResult


logger = logging.getLogger('anuvad.cli')


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _guess_mime_type(path: Path) -> str:
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or 'application/octet-stream'


def _default_output_path(text_arg: str, source_path: Path | None) -> Path:
    if source_path is not None:
        return source_path.with_name(f'{source_path.stem}.translated.pdf')
    if text_arg != '-':
        return Path(text_arg).expanduser().resolve().with_suffix('.pdf')
    return Path('translated.pdf').resolve()


def cmd_render(args: argparse.Namespace) -> int:
    settings = get_settings()

    try:
        translated_text = read_text_input(args.text)
    except (OSError, UnicodeDecodeError) as exc:
        _print_json({'status': 'error', 'message': f'Cannot read translated text: {exc}'})
        return 2

    source_path: Path | None = None
    source_bytes: bytes | None = None
    mime_type: str | None = args.mime_type
    if args.source:
        source_path = Path(args.source).expanduser().resolve()
        if not source_path.exists() or not source_path.is_file():
            _print_json({'status': 'error', 'message': f'Source file not found: {source_path}'})
            return 2
        file_size = int(source_path.stat().st_size)
        if file_size <= 0:
            _print_json({'status': 'error', 'message': f'Source file is empty: {source_path}'})
            return 2
        if file_size > int(settings.max_source_bytes):
            _print_json(
                {
                    'status': 'error',
                    'message': (
                        f'Source file too large: {file_size} bytes, '
                        f'max allowed {int(settings.max_source_bytes)} bytes'
                    ),
                }
            )
            return 2
        source_bytes = source_path.read_bytes()
        if not mime_type:
            mime_type = _guess_mime_type(source_path)

    options = LayoutOptions.from_settings(settings)
    try:
        if args.font_size is not None:
            options = replace(options, font_size=float(args.font_size))
        if args.line_height is not None:
            options = replace(options, line_height=float(args.line_height))
    except ValueError as exc:
        _print_json({'status': 'error', 'message': f'Invalid layout option: {exc}'})
        return 2

    try:
        outcome = layout_document(source_bytes, translated_text, mime_type, options=options)
    except FallbackRenderError as exc:
        logger.error('Rendering failed: %s', exc)
        _print_json({'status': 'error', 'message': f'Rendering failed: {exc}'})
        return 1

    output_path = (
        Path(args.output).expanduser().resolve()
        if args.output
        else _default_output_path(args.text, source_path)
    )
    write_bytes_atomic(output_path, outcome.pdf_bytes)

    result = RenderResult(
        mode=outcome.mode,
        page_count=outcome.page_count,
        byte_size=len(outcome.pdf_bytes),
        source_mime_type=mime_type,
        output_path=str(output_path),
        translated_pdf=base64.b64encode(outcome.pdf_bytes).decode('ascii') if args.base64 else None,
    )
    payload = result.model_dump(mode='json', by_alias=True, exclude_none=True)
    if args.summary:
        write_json_atomic(Path(args.summary).expanduser().resolve(), payload)
    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Typeset translated text over a source document as PDF')
    parser.add_argument('--log-level', required=False, help='Logging level (default from settings)')
    sub = parser.add_subparsers(dest='command', required=True)

    render = sub.add_parser('render', help='Render translated text to a PDF')
    render.add_argument('--text', required=True, help='Translated text file (UTF-8), or - for stdin')
    render.add_argument('--source', required=False, help='Original uploaded file')
    render.add_argument('--mime-type', required=False, help='MIME type of the source (guessed from extension)')
    render.add_argument('--output', required=False, help='Output PDF path')
    render.add_argument('--summary', required=False, help='Also write the JSON summary to this path')
    render.add_argument('--font-size', type=float, required=False)
    render.add_argument('--line-height', type=float, required=False)
    render.add_argument('--base64', action='store_true', help='Include the PDF as base64 in the summary')
    render.set_defaults(func=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level_name = str(args.log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    return int(args.func(args))


if __name__ == '__main__':
    raise SystemExit(main())
