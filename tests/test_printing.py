"""Tests for printable documents."""

import webbrowser
from datetime import date

import pytest

from shopdesk.domain.errors import PrintSurfaceError
from shopdesk.domain.reporting import SIGN_OFF_LABELS, ReportDocument, ReportSection
from shopdesk.printing import open_print_surface, render_document


def _document():
    return ReportDocument(
        title="Weekly Delivery List",
        subtitle="A - Period: 2024-01-15 to 2024-01-21",
        generated_on=date(2024, 1, 20),
        sections=(
            ReportSection(
                title="A - Weekly Delivery List",
                columns=("Supply Name", "Amount"),
                rows=(("Bread <flour>", "R120.00"), ("Milk", "R60.00")),
                highlighted_rows=frozenset({0}),
                total_row=("Total Amount", "R180.00"),
                signature_labels=("Handed Over By", "Received By"),
            ),
            ReportSection(title="B - Weekly Delivery List", columns=("Supply Name",), page_break_before=True),
        ),
        sign_off_labels=SIGN_OFF_LABELS,
    )


def test_render_document():
    html = render_document(_document())

    assert "FINAL AUTHORIZATION" in html
    assert "Bread &lt;flour&gt;" in html
    assert 'class="highlight"' in html
    assert "page-break" in html
    assert "No data" in html
    assert "Received By" in html
    assert "window.print()" in html


def test_render_without_auto_print():
    assert "window.print()" not in render_document(_document(), auto_print=False)


def test_write_without_launching(tmp_path):
    target = open_print_surface("<html></html>", path=str(tmp_path / "doc.html"), launch=False)

    assert target.read_text(encoding="utf-8") == "<html></html>"


def test_failed_launch_removes_file(tmp_path, monkeypatch):
    monkeypatch.setattr(webbrowser, "open", lambda url: False)
    path = tmp_path / "doc.html"

    with pytest.raises(PrintSurfaceError):
        open_print_surface("<html></html>", path=str(path))

    assert not path.exists()


def test_browser_error_is_reported(tmp_path, monkeypatch):
    def broken(url):
        raise webbrowser.Error("no runnable browser")

    monkeypatch.setattr(webbrowser, "open", broken)

    with pytest.raises(PrintSurfaceError, match="Could not open the print window"):
        open_print_surface("<html></html>", path=str(tmp_path / "doc.html"))


def test_successful_launch(tmp_path, monkeypatch):
    opened = []
    monkeypatch.setattr(webbrowser, "open", lambda url: opened.append(url) or True)

    target = open_print_surface("<html></html>", path=str(tmp_path / "doc.html"))

    assert target.exists()
    assert opened == [target.resolve().as_uri()]
