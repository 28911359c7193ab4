from __future__ import annotations

from dataclasses import dataclass
from email import policy
from email.errors import MessageError
from email.message import Message
from email.parser import BytesParser

from ridetrack.modules.extraction.errors import MalformedEmailError
from ridetrack.modules.extraction.parsers.common import html_to_text


@dataclass(frozen=True)
class ParsedEmail:
    sender: str
    subject: str
    to: str
    text: str
    html: str
    raw: str


def parse_raw_email(raw_email: bytes | str) -> ParsedEmail:
    body = raw_email.encode("utf-8") if isinstance(raw_email, str) else bytes(raw_email or b"")
    if not body.strip():
        raise MalformedEmailError("Email is empty")

    try:
        msg = BytesParser(policy=policy.default).parsebytes(body)
    except (MessageError, ValueError, TypeError) as e:
        raise MalformedEmailError(f"Email could not be parsed: {e}") from e

    if not msg.keys():
        raise MalformedEmailError("Email has no headers")

    try:
        plain, html = _extract_bodies(msg)
    except (MessageError, LookupError, ValueError) as e:
        raise MalformedEmailError(f"Email body could not be decoded: {e}") from e

    text = plain or (html_to_text(html) if html else "")
    return ParsedEmail(
        sender=_header(msg, "from"),
        subject=_header(msg, "subject"),
        to=_header(msg, "to"),
        text=text,
        html=html,
        raw=body.decode("utf-8", errors="replace"),
    )


def _header(msg: Message, name: str) -> str:
    try:
        return str(msg.get(name) or "").strip()
    except (MessageError, ValueError, IndexError):
        # Unparseable structured header; fall back to the raw value.
        for key, value in msg.raw_items():
            if key.lower() == name:
                return str(value).strip()
        return ""


def _part_text(part: Message) -> str | None:
    try:
        content = part.get_content()
        return str(content) if content is not None else None
    except (LookupError, KeyError):
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


def _extract_bodies(msg: Message) -> tuple[str, str]:
    parts_plain: list[str] = []
    parts_html: list[str] = []

    for part in msg.walk():
        if part.is_multipart():
            continue
        if str(part.get_content_disposition() or "").lower() == "attachment":
            continue
        ctype = str(part.get_content_type() or "").lower()
        if ctype not in {"text/plain", "text/html"}:
            continue
        text = _part_text(part)
        if not text:
            continue
        if ctype == "text/plain":
            parts_plain.append(text)
        else:
            parts_html.append(text)

    return "\n\n".join(parts_plain).strip(), "\n\n".join(parts_html).strip()
