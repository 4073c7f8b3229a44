"""
Lalitha Invoice PDF Generator
================================
Sale invoices with the business profile as letterhead.

Usage:
    from lalitha.forms.invoice_generator import generate_invoice_pdf, invoice_filename
    pdf = generate_invoice_pdf(sale, profile)  # wire-shaped dicts → PDF bytes
"""

import io
import os
import logging
from datetime import datetime

from reportlab.lib.pagesizes import A4
from reportlab.lib.colors import Color, HexColor
from reportlab.lib.utils import simpleSplit, ImageReader
from reportlab.pdfgen import canvas

from lalitha.core.paths import DATA_DIR

log = logging.getLogger("lalitha.invoice")

# ── Colors ──
PLUM     = HexColor("#800080")
LBL_BD   = Color(0.42, 0.13, 0.42)
BLACK    = HexColor("#000000")
WHITE    = HexColor("#FFFFFF")
GRAY     = HexColor("#555555")
ALT_ROW  = Color(0.97, 0.95, 0.98)

# Helvetica has no rupee glyph.
CURRENCY = "Rs."

PAGE_W, PAGE_H = A4  # 595 x 842
MARGIN_L = 36
MARGIN_R = 36
MARGIN_T = 36
MARGIN_B = 50
CONTENT_W = PAGE_W - MARGIN_L - MARGIN_R

ROWS_FIRST_PAGE = 22
ROWS_NEXT_PAGE = 30

# (x offset, header, right aligned)
COLUMNS = [
    (4,   "DRESS NAME", False),
    (170, "TYPE",       False),
    (250, "CODE",       False),
    (325, "SIZE",       False),
    (395, "QTY",        True),
    (460, "PRICE",      True),
    (CONTENT_W - 6, "TOTAL", True),
]


def _money(value) -> str:
    return f"{CURRENCY} {float(value or 0):,.2f}"


def _sale_date(sale: dict) -> datetime | None:
    try:
        return datetime.strptime((sale.get("date") or "")[:10], "%Y-%m-%d")
    except ValueError:
        return None


def invoice_filename(sale: dict) -> str:
    """Invoice_<bill>_<yyyymmdd>.pdf"""
    day = _sale_date(sale) or datetime.now()
    bill = "".join(ch for ch in (sale.get("billNumber") or "") if ch.isalnum() or ch in "-_")
    return f"Invoice_{bill or sale.get('id', 'sale')}_{day.strftime('%Y%m%d')}.pdf"


def _find_logo():
    for name in ("logo.png", "logo.jpg"):
        p = os.path.join(DATA_DIR, name)
        if os.path.exists(p):
            return p
    return None


def _draw_letterhead(c, profile, page_num, total_pages):
    """Business name, address and contact lines. Returns the next Y position."""
    y = PAGE_H - MARGIN_T
    rx = PAGE_W - MARGIN_R

    logo = _find_logo()
    if logo:
        try:
            c.drawImage(ImageReader(logo), rx - 80, y - 50, width=80, height=50,
                        preserveAspectRatio=True, mask="auto")
        except Exception as e:
            log.warning("Logo could not be drawn: %s", e)

    c.setFont("Helvetica-Bold", 20)
    c.setFillColor(PLUM)
    c.drawString(MARGIN_L, y - 18, profile.get("businessName", ""))

    c.setFont("Helvetica", 9)
    c.setFillColor(GRAY)
    y -= 34
    for line in simpleSplit(profile.get("address", ""), "Helvetica", 9, 360)[:3]:
        c.drawString(MARGIN_L, y, line)
        y -= 11
    c.drawString(MARGIN_L, y, f"Phone: {profile.get('phone', '')} | Email: {profile.get('email', '')}")
    if profile.get("gstNumber"):
        y -= 11
        c.drawString(MARGIN_L, y, f"GST: {profile['gstNumber']}")

    if total_pages > 1:
        c.drawRightString(rx, PAGE_H - MARGIN_T - 62, f"Page {page_num} of {total_pages}")
    return y - 14


def _draw_sale_details(c, y, sale):
    c.setFont("Helvetica-Bold", 18)
    c.setFillColor(BLACK)
    c.drawString(MARGIN_L, y - 16, "INVOICE")
    y -= 34

    day = _sale_date(sale)
    c.setFont("Helvetica", 10)
    c.drawString(MARGIN_L, y, f"Bill Number: {sale.get('billNumber', '')}")
    c.drawString(MARGIN_L, y - 13, f"Date: {day.strftime('%d %b %Y') if day else sale.get('date', '')}")
    c.drawString(MARGIN_L, y - 26, f"Party Name: {sale.get('partyName', '')}")
    return y - 40


def _draw_table_header(c, y):
    row_h = 18
    c.setFillColor(PLUM)
    c.rect(MARGIN_L, y - row_h, CONTENT_W, row_h, fill=1, stroke=0)
    c.setFillColor(WHITE)
    c.setFont("Helvetica-Bold", 8)
    for dx, label, right in COLUMNS:
        if right:
            c.drawRightString(MARGIN_L + dx, y - 13, label)
        else:
            c.drawString(MARGIN_L + dx, y - 13, label)
    return y - row_h


def _draw_item(c, y, idx, item, row_h=16):
    if idx % 2 == 1:
        c.setFillColor(ALT_ROW)
        c.rect(MARGIN_L, y - row_h, CONTENT_W, row_h, fill=1, stroke=0)

    qty = item.get("quantity") or 0
    price = item.get("sellingPrice") or 0
    cells = [
        (item.get("dressName") or "")[:32],
        (item.get("dressType") or "")[:14],
        (item.get("dressCode") or "")[:12],
        (item.get("size") or "")[:10],
        str(qty),
        _money(price),
        _money(price * qty),
    ]
    c.setFillColor(BLACK)
    c.setFont("Helvetica", 8)
    for (dx, _, right), text in zip(COLUMNS, cells):
        if right:
            c.drawRightString(MARGIN_L + dx, y - 12, text)
        else:
            c.drawString(MARGIN_L + dx, y - 12, text)
    return y - row_h


def _draw_totals(c, y, sale):
    y -= 8
    c.setStrokeColor(LBL_BD)
    c.setLineWidth(0.5)
    c.line(MARGIN_L, y + 2, MARGIN_L + CONTENT_W, y + 2)

    c.setFont("Helvetica-Bold", 12)
    c.setFillColor(BLACK)
    c.drawString(MARGIN_L, y - 14, f"Total Amount: {_money(sale.get('totalAmount'))}")
    c.setFont("Helvetica", 10)
    c.drawString(MARGIN_L, y - 30, f"Payment Mode: {sale.get('paymentMode', '')}")
    if sale.get("upiTransactionId"):
        c.drawString(MARGIN_L, y - 43, f"UPI Transaction ID: {sale['upiTransactionId']}")
    return y - 56


def _draw_footer(c, profile):
    y = MARGIN_B
    c.setStrokeColor(LBL_BD)
    c.setLineWidth(0.5)
    c.line(MARGIN_L, y + 12, PAGE_W - MARGIN_R, y + 12)
    c.setFont("Helvetica", 8)
    c.setFillColor(GRAY)
    c.drawString(MARGIN_L, y, "Thank you for your business!")
    if profile.get("whatsappNumber"):
        c.drawRightString(PAGE_W - MARGIN_R, y, f"WhatsApp: {profile['whatsappNumber']}")


def _page_count(n_items: int) -> int:
    if n_items <= ROWS_FIRST_PAGE:
        return 1
    remaining = n_items - ROWS_FIRST_PAGE
    return 1 + (remaining + ROWS_NEXT_PAGE - 1) // ROWS_NEXT_PAGE


def generate_invoice_pdf(sale: dict, profile: dict) -> bytes:
    """Render the invoice for a sale.

    Args:
        sale: wire-shaped sale (billNumber, date, partyName, items, ...)
        profile: wire-shaped business profile used as the letterhead

    Returns:
        The PDF document as bytes.
    """
    items = sale.get("items") or []
    total_pages = _page_count(len(items))

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Invoice {sale.get('billNumber', '')}")
    c.setAuthor(profile.get("businessName", ""))

    item_idx = 0
    for page in range(1, total_pages + 1):
        y = _draw_letterhead(c, profile, page, total_pages)
        if page == 1:
            y = _draw_sale_details(c, y, sale)
        y = _draw_table_header(c, y)

        rows_left = ROWS_FIRST_PAGE if page == 1 else ROWS_NEXT_PAGE
        while item_idx < len(items) and rows_left > 0:
            y = _draw_item(c, y, item_idx, items[item_idx])
            item_idx += 1
            rows_left -= 1

        if item_idx >= len(items):
            _draw_totals(c, y, sale)

        _draw_footer(c, profile)
        if page < total_pages:
            c.showPage()

    c.save()
    log.info("Invoice PDF generated: bill=%s (%d items, %d pages)",
             sale.get("billNumber", ""), len(items), total_pages)
    return buf.getvalue()
