"""vCard + QR code generation for a tenant's business card."""
import io
import re

import qrcode
import qrcode.constants
import qrcode.image.pil
import qrcode.image.svg


def build_vcard(card):
    """Return vCard 3.0 text for a BusinessCard."""
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"FN:{card.name}",
        f"ORG:{card.name}",
    ]
    if card.phone:
        lines.append(f"TEL:{card.phone}")
    if card.email:
        lines.append(f"EMAIL:{card.email}")
    if card.website:
        lines.append(f"URL:{card.website}")
    if card.instagram:
        lines.append(f"NOTE:Instagram: {card.instagram}")
    lines.append("END:VCARD")
    return "\n".join(lines)


def download_name(card, suffix):
    """'Sweets by Sami' → 'sweets-by-sami-<suffix>'."""
    base = re.sub(r"\s+", "-", card.name.strip()).lower()
    return f"{base}-{suffix}"


def _qr(card):
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(build_vcard(card))
    qr.make(fit=True)
    return qr


def qr_svg(card):
    """Inline SVG markup (no XML declaration) for embedding in the page."""
    img = _qr(card).make_image(image_factory=qrcode.image.svg.SvgPathImage)
    buffer = io.BytesIO()
    img.save(buffer)
    svg = buffer.getvalue().decode()
    if svg.startswith("<?xml"):
        svg = svg.split("?>", 1)[1].lstrip()
    return svg


def qr_png(card):
    """PNG bytes for the download button."""
    img = _qr(card).make_image(image_factory=qrcode.image.pil.PilImage)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
