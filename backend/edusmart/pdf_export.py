"""PDF rendering for generated documents.

Documents are A4 with a title header and a rule under it, the body text split
into paragraphs on blank lines, and a footer on every page reading
``Page X of Y • Generated by EduSmart AI • <date>``. Rendering happens fully in
memory so callers only set response headers once the bytes exist.
"""
from __future__ import annotations
import logging
import re
from datetime import date
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer
from reportlab.platypus.flowables import Flowable, HRFlowable

from .errors import DocumentExportFailed

log = logging.getLogger("edusmart.pdf")

BRAND = "EduSmart AI"
MARGIN = 50

_BRAND_BLUE = colors.HexColor("#2563eb")
_RULE_GREY = colors.HexColor("#e5e7eb")
_BODY_GREY = colors.HexColor("#1f2937")
_FOOTER_GREY = colors.HexColor("#6b7280")


class _NumberedCanvas(canvas.Canvas):
	# Pages are buffered so the footer can print the final page count
	def __init__(self, *args, **kwargs) -> None:
		super().__init__(*args, **kwargs)
		self._saved_page_states: List[dict] = []
		self._generated_on = date.today().strftime("%m/%d/%Y")

	def showPage(self) -> None:
		self._saved_page_states.append(dict(self.__dict__))
		self._startPage()

	def save(self) -> None:
		total = len(self._saved_page_states)
		for state in self._saved_page_states:
			self.__dict__.update(state)
			self._draw_footer(total)
			super().showPage()
		super().save()

	def _draw_footer(self, total: int) -> None:
		width = self._pagesize[0]
		self.saveState()
		self.setFont("Helvetica", 10)
		self.setFillColor(_FOOTER_GREY)
		self.drawCentredString(
			width / 2.0,
			MARGIN / 2.0,
			f"Page {self._pageNumber} of {total} • Generated by {BRAND} • {self._generated_on}",
		)
		self.restoreState()


def _draw_running_header(c: canvas.Canvas, doc: SimpleDocTemplate) -> None:
	width, height = doc.pagesize
	c.saveState()
	c.setFont("Helvetica-Bold", 9)
	c.setFillColor(_BRAND_BLUE)
	c.drawString(MARGIN, height - MARGIN / 2.0 - 4, BRAND)
	c.restoreState()


def _styles() -> dict:
	base = getSampleStyleSheet()
	return {
		"title": ParagraphStyle(
			"DocTitle",
			parent=base["Heading1"],
			fontSize=18,
			leading=22,
			textColor=_BRAND_BLUE,
			spaceAfter=8,
		),
		"body": ParagraphStyle(
			"DocBody",
			parent=base["Normal"],
			fontName="Helvetica",
			fontSize=12,
			leading=16,
			textColor=_BODY_GREY,
			spaceAfter=4,
		),
	}


def _paragraphs(text: str) -> List[str]:
	blocks = re.split(r"\n\s*\n", text.replace("\r\n", "\n").strip())
	return [escape(block.strip()).replace("\n", "<br/>") for block in blocks if block.strip()]


def render_pdf(text: str, title: Optional[str] = None) -> bytes:
	title = title or f"{BRAND} Document"
	buffer = BytesIO()
	try:
		doc = SimpleDocTemplate(
			buffer,
			pagesize=A4,
			leftMargin=MARGIN,
			rightMargin=MARGIN,
			topMargin=MARGIN,
			bottomMargin=MARGIN,
			title=title,
			author=BRAND,
		)
		styles = _styles()
		story: List[Flowable] = [
			Paragraph(escape(title), styles["title"]),
			HRFlowable(width="100%", thickness=1, color=_RULE_GREY, spaceBefore=2, spaceAfter=12),
		]
		for block in _paragraphs(text):
			story.append(Paragraph(block, styles["body"]))
		if len(story) == 2:
			story.append(Spacer(1, 12))
		doc.build(
			story,
			onFirstPage=_draw_running_header,
			onLaterPages=_draw_running_header,
			canvasmaker=_NumberedCanvas,
		)
		return buffer.getvalue()
	except Exception as e:
		log.exception("PDF generation failed for %r", title)
		raise DocumentExportFailed() from e
	finally:
		buffer.close()


def pdf_filename(title: str) -> str:
	slug = re.sub(r"[^a-z0-9]+", "-", (title or "").lower()).strip("-")[:100].rstrip("-")
	return f"{slug or 'document'}.pdf"
