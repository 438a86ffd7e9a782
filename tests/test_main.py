"""Tests for the command line entry point"""

import base64
import io
import json

from pypdf import PdfReader

import main


def _run(capsys, argv):
    code = main.main(argv)
    out = capsys.readouterr().out
    return code, json.loads(out)


def test_render_over_source_pdf(tmp_path, capsys, letter_pdf):
    source = tmp_path / 'upload.pdf'
    source.write_bytes(letter_pdf)
    text = tmp_path / 'translated.txt'
    text.write_text('Translated **heading**\nbody text', encoding='utf-8')

    code, payload = _run(capsys, ['render', '--text', str(text), '--source', str(source)])

    assert code == 0
    assert payload['mode'] == 'primary'
    assert payload['page_count'] == 3
    assert payload['source_mime_type'] == 'application/pdf'
    output = tmp_path / 'upload.translated.pdf'
    assert payload['output_path'] == str(output)
    assert len(PdfReader(io.BytesIO(output.read_bytes())).pages) == 3
    assert 'translatedPdf' not in payload


def test_render_text_only_with_base64(tmp_path, capsys):
    text = tmp_path / 'note.txt'
    text.write_text('hello', encoding='utf-8')
    output = tmp_path / 'out' / 'note.pdf'
    summary = tmp_path / 'summary.json'

    code, payload = _run(
        capsys,
        ['render', '--text', str(text), '--output', str(output), '--base64', '--summary', str(summary)],
    )

    assert code == 0
    assert base64.b64decode(payload['translatedPdf']) == output.read_bytes()
    assert json.loads(summary.read_text(encoding='utf-8'))['page_count'] == 1


def test_render_rejects_missing_source(tmp_path, capsys):
    text = tmp_path / 'note.txt'
    text.write_text('hello', encoding='utf-8')
    code, payload = _run(capsys, ['render', '--text', str(text), '--source', str(tmp_path / 'nope.pdf')])
    assert code == 2
    assert payload['status'] == 'error'


def test_render_rejects_empty_source(tmp_path, capsys):
    text = tmp_path / 'note.txt'
    text.write_text('hello', encoding='utf-8')
    source = tmp_path / 'empty.pdf'
    source.write_bytes(b'')
    code, payload = _run(capsys, ['render', '--text', str(text), '--source', str(source)])
    assert code == 2
    assert 'empty' in payload['message']


def test_render_reports_fatal_failure(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv('ANUVAD_REGULAR_FONT', 'NoSuchFont')
    main.get_settings.cache_clear()
    try:
        text = tmp_path / 'note.txt'
        text.write_text('hello', encoding='utf-8')
        code, payload = _run(capsys, ['render', '--text', str(text), '--output', str(tmp_path / 'x.pdf')])
    finally:
        main.get_settings.cache_clear()

    assert code == 1
    assert payload['status'] == 'error'
    assert not (tmp_path / 'x.pdf').exists()


def test_render_rejects_non_positive_line_height(tmp_path, capsys):
    text = tmp_path / 'note.txt'
    text.write_text('hello', encoding='utf-8')
    output = tmp_path / 'x.pdf'
    code, payload = _run(
        capsys,
        ['render', '--text', str(text), '--output', str(output), '--line-height', '-16'],
    )
    assert code == 2
    assert 'line_height' in payload['message']
    assert not output.exists()


def test_render_rejects_zero_font_size(tmp_path, capsys):
    text = tmp_path / 'note.txt'
    text.write_text('hello', encoding='utf-8')
    code, payload = _run(capsys, ['render', '--text', str(text), '--font-size', '0'])
    assert code == 2
    assert payload['status'] == 'error'
