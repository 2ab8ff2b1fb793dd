from __future__ import annotations

import re

import pytest

from edusmart.pdf_export import pdf_filename, render_pdf


def _page_count(pdf: bytes) -> int:
	counts = [int(n) for n in re.findall(rb"/Count (\d+)", pdf)]
	assert counts
	return max(counts)


def test_renders_a_pdf_document() -> None:
	pdf = render_pdf("First paragraph.\n\nSecond paragraph\nwith a line break.", "Quiz - Fractions")
	assert pdf.startswith(b"%PDF")
	assert _page_count(pdf) == 1


def test_long_text_paginates() -> None:
	text = "\n\n".join(f"Paragraph {i}: " + "lorem " * 60 for i in range(60))
	assert _page_count(render_pdf(text, "Long Answer - Cells")) > 1


def test_markup_characters_are_escaped() -> None:
	pdf = render_pdf("if a < b & b > c then <b>a < c", "Logic <1> & more")
	assert pdf.startswith(b"%PDF")


def test_empty_text_still_renders() -> None:
	assert render_pdf("", "").startswith(b"%PDF")


@pytest.mark.parametrize(
	"title, expected",
	[
		("Assignment - Photosynthesis in plants", "assignment-photosynthesis-in-plants.pdf"),
		("Quiz - What's 2+2?", "quiz-what-s-2-2.pdf"),
		("  ***  ", "document.pdf"),
		("Élan vital", "lan-vital.pdf"),
	],
)
def test_pdf_filename(title: str, expected: str) -> None:
	assert pdf_filename(title) == expected


def test_pdf_filename_is_bounded() -> None:
	name = pdf_filename("Long Answer - " + "word " * 100)
	assert len(name) <= 104
	assert not name.startswith("-")
	assert re.fullmatch(r"[a-z0-9-]+\.pdf", name)
