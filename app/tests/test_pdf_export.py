import io

import pypdf
import pytest

from app.core.exceptions import ExportError
from app.services.tools import pdf_export
from app.services.tools.pdf_export import export_filename, export_report_to_pdf, render_pdf_bytes
from app.services.tools.report_generator import ReportGenerator


@pytest.mark.parametrize(
    "company, expected",
    [
        ("Google", "Google_Interview_Prep.pdf"),
        ("Goldman Sachs", "Goldman_Sachs_Interview_Prep.pdf"),
        ("Tata  Consultancy\tServices", "Tata_Consultancy_Services_Interview_Prep.pdf"),
    ],
)
def test_export_filename_replaces_whitespace_runs(company: str, expected: str) -> None:
    assert export_filename(company) == expected


def test_export_filename_other_extension() -> None:
    assert export_filename("Goldman Sachs", "txt") == "Goldman_Sachs_Interview_Prep.txt"


def test_pdf_bytes_contain_rendered_report(guide) -> None:
    report = ReportGenerator.render(guide)

    data = render_pdf_bytes(report)

    assert data.startswith(b"%PDF")
    reader = pypdf.PdfReader(io.BytesIO(data))
    text = "".join(page.extract_text() for page in reader.pages)
    assert "Goldman Sachs Interview Prep Guide" in text
    assert "Coding Round Analysis" in text
    assert "Rs." in text


def test_long_report_is_paginated(guide_dict) -> None:
    from app.schemas.interview import PrepGuide

    guide_dict["sampleAnswers"]["answers"] = [
        {"question": f"Question {i}?", "answer": "A fairly long answer. " * 40} for i in range(30)
    ]
    report = ReportGenerator.render(PrepGuide.model_validate(guide_dict))

    reader = pypdf.PdfReader(io.BytesIO(render_pdf_bytes(report)))

    assert len(reader.pages) > 1


def test_export_to_path_creates_parent_dirs(guide, tmp_path) -> None:
    target = tmp_path / "out" / export_filename(guide.company_name)

    written = export_report_to_pdf(ReportGenerator.render(guide), target)

    assert written == str(target)
    assert target.read_bytes().startswith(b"%PDF")


def test_failed_export_raises_export_error_and_keeps_report(guide, guide_dict, monkeypatch) -> None:
    report = ReportGenerator.render(guide)
    blocks_before = list(report.blocks)

    def broken_writer(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(pdf_export, "_write_pdf", broken_writer)

    with pytest.raises(ExportError):
        render_pdf_bytes(report)

    assert report.blocks == blocks_before
    assert guide.to_wire() == guide_dict


def test_overlong_words_and_code_lines_are_wrapped() -> None:
    lines = pdf_export._wrap_words("x" * 500, "Helvetica", 10, 200)
    assert len(lines) > 1
    assert "".join(lines) == "x" * 500

    code_lines = pdf_export._wrap_code("    " + "y" * 300, 8, 200)
    assert len(code_lines) > 1
    assert "".join(code_lines) == "    " + "y" * 300
