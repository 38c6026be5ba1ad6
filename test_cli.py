import json

from main import build_parser, run
from pdflayout.rendering.pdf_writer import ReportLabWriter


def write_sample(tmp_path):
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(ReportLabWriter().write([(600, 800, [("Hello CLI", 72, 700, 12)])]))
    return pdf_path


def test_layout_mode_saves_json(tmp_path):
    pdf_path = write_sample(tmp_path)
    out = tmp_path / "out"
    args = build_parser().parse_args(["-i", str(pdf_path), "-o", str(out), "--no-columns"])

    assert run(args) == 0
    data = json.loads((out / "sample_layout.json").read_text(encoding="utf-8"))
    assert data["pages"][0]["text"] == "Hello CLI"
    assert data["pages"][0]["structure"] is None
    assert data["metadata"]["options"]["detectColumns"] is False


def test_exact_mode_from_saved_json(tmp_path):
    pdf_path = write_sample(tmp_path)
    out = tmp_path / "out"
    assert run(build_parser().parse_args(["-i", str(pdf_path), "-o", str(out)])) == 0

    json_path = out / "sample_layout.json"
    assert run(build_parser().parse_args(["-i", str(json_path), "-o", str(out), "-m", "exact"])) == 0
    assert (out / "sample_exact.pdf").read_bytes().startswith(b"%PDF")


def test_text_mode(tmp_path):
    pdf_path = write_sample(tmp_path)
    args = build_parser().parse_args(["-i", str(pdf_path), "-o", str(tmp_path), "-m", "text"])

    assert run(args) == 0
    assert (tmp_path / "sample.txt").read_text(encoding="utf-8") == "Hello CLI\n"


def test_unreadable_pdf_exits_with_error(tmp_path):
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"")
    args = build_parser().parse_args(["-i", str(bad), "-o", str(tmp_path), "-m", "reflow"])

    assert run(args) == 1


def test_malformed_layout_json_exits_with_error(tmp_path, capsys):
    bad = tmp_path / "doc_layout.json"
    bad.write_text("{not json", encoding="utf-8")
    args = build_parser().parse_args(["-i", str(bad), "-o", str(tmp_path), "-m", "exact"])

    assert run(args) == 1
    assert "Error loading layout" in capsys.readouterr().out
    assert not (tmp_path / "doc_exact.pdf").exists()


def test_layout_json_missing_fields_exits_with_error(tmp_path, capsys):
    bad = tmp_path / "doc_layout.json"
    bad.write_text(json.dumps({"pages": []}), encoding="utf-8")
    args = build_parser().parse_args(["-i", str(bad), "-o", str(tmp_path), "-m", "reflow"])

    assert run(args) == 1
    assert "Error loading layout" in capsys.readouterr().out
