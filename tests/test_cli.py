import json
import sys

import pytest

from resume_form_ai import __main__ as cli
from resume_form_ai.resume_pipeline import resume_streamer


async def _fake_stream(prompt):
    yield "firstName::Ann\nskills::SQL,Go\nlanguages::English, Urdu\n"


def test_cli_writes_record_json(tmp_path, monkeypatch, capsys):
    resume = tmp_path / "ann.txt"
    resume.write_text("Ann Lee\nSQL, Go", encoding="utf-8")
    monkeypatch.setattr(resume_streamer, "openai_text_stream", _fake_stream)
    monkeypatch.setattr(sys, "argv", ["resume-form-ai", str(resume)])

    cli.main()

    data = json.loads((tmp_path / "ann.json").read_text(encoding="utf-8"))
    assert data["firstName"] == "Ann"
    assert data["skills"] == ["SQL", "Go"]
    assert data["languages"] == "English"
    assert data["employmentStatus"] == ""
    assert "Results saved" in capsys.readouterr().out


def test_cli_reports_unsupported_file(tmp_path, monkeypatch, capsys):
    image = tmp_path / "photo.png"
    image.write_bytes(b"\x89PNG")
    monkeypatch.setattr(sys, "argv", ["resume-form-ai", str(image)])

    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Unsupported file type" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["resume-form-ai", str(tmp_path / "nope.pdf")])
    with pytest.raises(SystemExit):
        cli.main()
