from __future__ import annotations

import json
from pathlib import Path

import parse_notes


def test_json_output(tmp_path: Path, capsys):
    note_path = tmp_path / "note.txt"
    note_path.write_text("Random preamble text\nSubtotal: $100\n", encoding="utf-8")

    parse_notes.main([str(note_path)])

    data = json.loads(capsys.readouterr().out)
    assert data["totals"] == [{"label": "Subtotal", "value": "$100"}]
    assert data["other"] == [
        {"label": "Additional Details", "value": ["Random preamble text"]}
    ]


def test_text_output(tmp_path: Path, capsys, estimate_note):
    note_path = tmp_path / "note.txt"
    note_path.write_text(estimate_note, encoding="utf-8")

    parse_notes.main([str(note_path), "--format", "text"])

    out = capsys.readouterr().out
    assert out.startswith("Estimate\n  Estimate #: 1042")
    assert "Financials\n  Subtotal: $1,060.00" in out
