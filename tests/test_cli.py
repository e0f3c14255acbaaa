import json
import sys
from pathlib import Path

import fitz

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pdf_highlight_kit.cli import main


def _write_pdf(path, text="HELLO WORLD"):
    doc = fitz.open()
    page = doc.new_page(width=400, height=300)
    page.insert_text((50, 100), text, fontsize=14)
    doc.save(str(path))
    doc.close()
    return str(path)


def test_highlight_then_extract(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf")
    output_path = tmp_path / "out" / "annotated.pdf"
    output_path.parent.mkdir()

    assert main(["highlight", "--pdf-file", pdf_path, "--text", "WORLD", "--output", str(output_path)]) == 0
    assert "✅ Highlighted: WORLD" in capsys.readouterr().out

    json_path = tmp_path / "export" / "highlights.json"
    assert main(["extract", "--pdf-file", str(output_path), "--export-json", str(json_path)]) == 0
    out = capsys.readouterr().out
    assert "Found 1 highlighted passages" in out
    assert "1. WORLD" in out

    exported = json.loads(json_path.read_text(encoding="utf-8"))
    assert exported["pdf_file"] == str(output_path)
    assert [h["text"] for h in exported["highlights"]] == ["WORLD"]
    assert exported["highlights"][0]["color"] == "#FFFF00"


def test_highlight_targets_file_with_custom_color(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf")
    targets = tmp_path / "targets.txt"
    targets.write_text("\ufeffHELLO\n\nMISSING\n", encoding="utf-8")
    output_path = tmp_path / "annotated.pdf"

    code = main(["highlight", "--pdf-file", pdf_path, "--targets-file", str(targets),
                 "--color", "#00ff00", "--output", str(output_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert "❌ Not found: MISSING" in out
    assert "Added highlights for 1 of 2 search texts" in out

    main(["extract", "--pdf-file", str(output_path), "--export-json", str(tmp_path / "h.json")])
    exported = json.loads((tmp_path / "h.json").read_text(encoding="utf-8"))
    assert exported["highlights"][0]["color"] == "#00FF00"


def test_highlight_nothing_found_leaves_file_alone(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf")
    before = Path(pdf_path).read_bytes()

    assert main(["highlight", "--pdf-file", pdf_path, "--text", "GOODBYE"]) == 1
    assert "the PDF was not modified" in capsys.readouterr().out
    assert Path(pdf_path).read_bytes() == before


def test_unknown_style_is_an_error(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf")
    assert main(["highlight", "--pdf-file", pdf_path, "--text", "HELLO", "--style", "neon"]) == 1
    assert "Unknown highlight style" in capsys.readouterr().out


def test_locate(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf", text="ONE TWO ONE")

    assert main(["locate", "--pdf-file", pdf_path, "--text", "ONE", "--all"]) == 0
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("page 1:")]
    assert len(lines) == 2

    assert main(["locate", "--pdf-file", pdf_path, "--text", "THREE"]) == 1


def test_remove(tmp_path, capsys):
    pdf_path = _write_pdf(tmp_path / "hello.pdf")
    main(["highlight", "--pdf-file", pdf_path, "--text", "HELLO", "--backup"])
    assert Path(pdf_path + ".backup").exists()

    doc = fitz.open(pdf_path)
    rect = next(doc[0].annots()).rect
    doc.close()
    center = (rect.tl + rect.br) / 2

    capsys.readouterr()
    assert main(["remove", "--pdf-file", pdf_path, "--page", "1",
                 "--x", str(center.x), "--y", str(center.y), "--top-left"]) == 0
    assert "Highlight removed" in capsys.readouterr().out

    main(["extract", "--pdf-file", pdf_path])
    assert "Found 0 highlighted passages" in capsys.readouterr().out


def test_extract_folder(tmp_path, capsys):
    _write_pdf(tmp_path / "a.pdf")
    _write_pdf(tmp_path / "b.pdf")

    assert main(["extract", "--pdf-file", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Processing highlights for: a.pdf" in out
    assert "Processing highlights for: b.pdf" in out


def test_missing_file(tmp_path, capsys):
    assert main(["extract", "--pdf-file", str(tmp_path / "missing.pdf")]) == 1
    assert "Error:" in capsys.readouterr().out
