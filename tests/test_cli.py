"""Command-line runs against the generated test font."""
import json

import pytest

import fontbake.sysfonts
from fontbake.cli import main
from tests.conftest import TEST_FAMILY


def test_bake_to_file(test_font_path, tmp_path, capsys):
    out = tmp_path / "font.cppm"
    png = tmp_path / "preview.png"
    code = main(["-f", str(test_font_path), "-s", "20", "--start", "A", "--end", "B",
                 "--custom", "一", "--fallback", "?", "-o", str(out), "--preview", str(png)])
    assert code == 0
    text = out.read_text()
    assert "export module font_generated;" in text
    assert "{ 0x4E00, 1, 2 }" in text
    assert png.exists()
    stdout = capsys.readouterr().out
    assert "warning: U+4E00 missing, using fallback U+003F" in stdout
    assert "Glyphs: 3 (3 distinct), ranges: 2" in stdout


def test_code_to_stdout_status_to_stderr(test_font_path, capsys):
    assert main(["-f", str(test_font_path), "--start", "A", "--end", "A", "--no-comments"]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("// Generated by fontbake")
    assert "Loading font" not in captured.out
    assert "Loading font" in captured.err


def test_invalid_range(test_font_path, capsys):
    assert main(["-f", str(test_font_path), "--start", "Z", "--end", "A"]) == 1
    assert "Range start U+005A is after range end U+0041" in capsys.readouterr().err


def test_missing_font(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "nope.ttf"), "--start", "A", "--end", "A"]) == 1
    assert "Failed to load font" in capsys.readouterr().err


def test_no_font(capsys):
    assert main(["--start", "A", "--end", "B"]) == 1
    assert "No font given" in capsys.readouterr().err


def test_bad_codepoint_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["-f", "x.ttf", "--start", "zz"])
    assert exc.value.code == 2


def test_chars_option(test_font_path, tmp_path):
    out = tmp_path / "font.cppm"
    assert main(["-f", str(test_font_path), "--start", "?", "--end", "?",
                 "--chars", "0x41-0x42", "-o", str(out)]) == 0
    text = out.read_text()
    assert "{ 0x003F, 1, 0 }" in text
    assert "{ 0x0041, 2, 1 }" in text
    assert ".fallback_glyph = &glyph_table[0]," in text


def test_config_file_and_override(test_font_path, tmp_path):
    out = tmp_path / "font.cppm"
    cfg = tmp_path / "job.json"
    cfg.write_text(json.dumps({
        "font_path": str(test_font_path),
        "size_px": 12,
        "range_start": "A",
        "range_end": "B",
        "number_format": "bin",
        "export_name": "tiny",
        "output": str(out),
    }))
    assert main(["--config", str(cfg)]) == 0
    text = out.read_text()
    assert "0b" in text and "export constexpr Font tiny = {" in text

    assert main(["--config", str(cfg), "--format", "dec", "--export-name", "big"]) == 0
    text = out.read_text()
    assert "0b" not in text and "export constexpr Font big = {" in text


def test_bad_config(tmp_path, capsys):
    cfg = tmp_path / "job.json"
    cfg.write_text(json.dumps({"threshold": 100}))
    assert main(["--config", str(cfg)]) == 1
    assert "threshold" in capsys.readouterr().err


def test_system_font(font_dir, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(fontbake.sysfonts, "font_dirs", lambda: [font_dir])
    out = tmp_path / "font.cppm"
    assert main(["--system-font", TEST_FAMILY, "--start", "A", "--end", "A", "-o", str(out)]) == 0
    assert out.exists()

    assert main(["--list-fonts"]) == 0
    assert TEST_FAMILY in capsys.readouterr().out


def test_chars_beyond_unicode(test_font_path, tmp_path, capsys):
    out = tmp_path / "font.cppm"
    assert main(["-f", str(test_font_path), "--chars", "0x110000", "-o", str(out)]) == 1
    assert "out of range" in capsys.readouterr().err
    assert not out.exists()


def test_numeric_fallback_in_config(test_font_path, tmp_path, capsys):
    cfg = tmp_path / "job.json"
    cfg.write_text(json.dumps({"font_path": str(test_font_path), "fallback_char": 63}))
    assert main(["--config", str(cfg)]) == 1
    assert "Fallback must be a character" in capsys.readouterr().err


def test_version(capsys):
    import fontbake

    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert f"fontbake {fontbake.VERSION}" in capsys.readouterr().out
