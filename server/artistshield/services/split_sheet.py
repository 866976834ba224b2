"""Split sheets: share validation, HTML rendering and delivery for signature."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from html import escape

from artistshield.schemas.split_sheet import ShareSummary, SongInfo, Writer
from artistshield.services.mailer import ResendMailer

logger = logging.getLogger(__name__)

SHARE_TOLERANCE = 0.01

MISSING_TITLE = "Please enter a song title"
MISSING_WRITER = "Please add at least one writer"
UNBALANCED_SHARES = "Shares must total 100%"
NO_RECIPIENTS = "Add email addresses to send for signature"

BALANCED_COLOR = "#22c55e"
UNBALANCED_COLOR = "#ef4444"


class SplitSheetValidationError(ValueError):
    """The split sheet cannot be sent as entered. The message is user-facing."""


class NoRecipientsError(SplitSheetValidationError):
    pass


@dataclass(frozen=True)
class Recipient:
    email: str
    name: str


def writers_total(writers: Sequence[Writer]) -> float:
    return sum(w.share for w in writers)


def publishers_total(writers: Sequence[Writer]) -> float:
    return sum(w.publisher.share for w in writers if w.publisher)


def shares_are_balanced(grand_total: float) -> bool:
    return abs(grand_total - 100) < SHARE_TOLERANCE


def collect_recipients(writers: Sequence[Writer]) -> list[Recipient]:
    """Every writer and publisher email, once each (first name given wins)."""
    recipients: list[Recipient] = []
    seen: set[str] = set()

    def add(email: str, name: str) -> None:
        key = email.strip().lower()
        if not key or key in seen:
            return
        seen.add(key)
        recipients.append(Recipient(email=email.strip(), name=name))

    for writer in writers:
        add(writer.email, writer.full_name or "Writer")
        if writer.publisher:
            add(writer.publisher.email, writer.publisher.name or "Publisher")
    return recipients


def summarize_shares(writers: Sequence[Writer]) -> ShareSummary:
    w_total = writers_total(writers)
    p_total = publishers_total(writers)
    grand = w_total + p_total
    return ShareSummary(
        writers_total=round(w_total, 2),
        publishers_total=round(p_total, 2),
        grand_total=round(grand, 2),
        is_valid=shares_are_balanced(grand),
        recipient_count=len(collect_recipients(writers)),
    )


def validate_split_sheet(song_info: SongInfo, writers: Sequence[Writer]) -> None:
    """Check a split sheet before anything is sent.

    Raises SplitSheetValidationError carrying the first problem found.
    """
    if not song_info.title:
        raise SplitSheetValidationError(MISSING_TITLE)
    if all(not w.full_name for w in writers):
        raise SplitSheetValidationError(MISSING_WRITER)
    if not shares_are_balanced(writers_total(writers) + publishers_total(writers)):
        raise SplitSheetValidationError(UNBALANCED_SHARES)
    if not collect_recipients(writers):
        raise NoRecipientsError(NO_RECIPIENTS)


def build_subject(song_info: SongInfo) -> str:
    return f'Split Sheet for Review: "{song_info.title}"'


def _cell(value: str, extra_style: str = "") -> str:
    style = "padding: 12px; border-bottom: 1px solid #333;" + extra_style
    return f'<td style="{style}">{escape(value) if value else "-"}</td>'


def _share_cell(share: float, color: str = "") -> str:
    style = " text-align: right; font-weight: bold;"
    if color:
        style += f" color: {color};"
    return _cell(f"{share:.2f}%", style)


def _writer_rows(writer: Writer) -> str:
    rows = (
        "<tr>"
        + _cell(writer.full_name)
        + _cell(writer.role)
        + _cell(writer.pro)
        + _cell(writer.ipi_number)
        + _share_cell(writer.share)
        + "</tr>"
    )
    publisher = writer.publisher
    if publisher:
        rows += (
            '<tr style="background: rgba(218, 165, 32, 0.1);">'
            + _cell(f"↳ {publisher.name} (Publisher)", " padding-left: 30px;")
            + _cell("Publisher")
            + _cell(publisher.pro)
            + _cell(publisher.ipi_number)
            + _share_cell(publisher.share, "#DAA520")
            + "</tr>"
        )
    return rows


def _song_details(song_info: SongInfo) -> str:
    details = [
        ("Artist", song_info.artist_name),
        ("Album/Single", song_info.album_title),
        ("Release Date", song_info.release_date),
        ("ISRC", song_info.isrc_code),
    ]
    return "".join(
        f'<p style="margin: 0;"><strong>{label}:</strong> {escape(value)}</p>'
        for label, value in details
        if value
    )


def render_split_sheet_html(
    song_info: SongInfo, writers: Sequence[Writer], recipient_name: str
) -> str:
    """Render the split sheet email. Only the greeting depends on the recipient."""
    grand_total = writers_total(writers) + publishers_total(writers)
    total_color = BALANCED_COLOR if shares_are_balanced(grand_total) else UNBALANCED_COLOR
    title = escape(song_info.title)
    rows = "".join(_writer_rows(w) for w in writers)
    header_cell = 'style="padding: 12px; text-align: {align}; border-bottom: 2px solid #9333ea;"'
    headers = "".join(
        f"<th {header_cell.format(align='right' if label == 'Share' else 'left')}>{label}</th>"
        for label in ("Name", "Role", "PRO", "IPI", "Share")
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Split Sheet - {title}</title>
</head>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; background: #1a1a2e; color: #f5f5f5; margin: 0; padding: 40px;">
  <div style="max-width: 700px; margin: 0 auto; background: #16213e; border-radius: 12px; overflow: hidden;">
    <div style="background: linear-gradient(135deg, #9333ea 0%, #7c3aed 100%); padding: 30px; text-align: center;">
      <h1 style="margin: 0; font-size: 28px;">Split Sheet</h1>
      <p style="margin: 10px 0 0;">Songwriter Royalty Agreement</p>
    </div>
    <div style="padding: 30px; border-bottom: 1px solid #333;">
      <h2 style="margin: 0 0 20px; color: #DAA520;">{title}</h2>
      {_song_details(song_info)}
    </div>
    <div style="padding: 30px 30px 0;">
      <p style="margin: 0;">Dear {escape(recipient_name)},</p>
      <p>You are receiving this split sheet for review and signature. Please review the ownership splits below:</p>
    </div>
    <div style="padding: 0 30px 30px;">
      <table style="width: 100%; border-collapse: collapse; margin-top: 20px;">
        <thead><tr style="background: #0f3460;">{headers}</tr></thead>
        <tbody>{rows}</tbody>
        <tfoot>
          <tr style="background: #0f3460;">
            <td colspan="4" style="padding: 12px; font-weight: bold;">Total</td>
            <td style="padding: 12px; text-align: right; font-weight: bold; color: {total_color};">{grand_total:.2f}%</td>
          </tr>
        </tfoot>
      </table>
    </div>
    <div style="padding: 30px; background: #0f3460;">
      <h3 style="margin: 0 0 15px; color: #DAA520;">Agreement &amp; Signature</h3>
      <p style="margin: 0 0 20px; font-size: 14px; color: #aaa;">By signing below, I confirm that the above information is accurate and I agree to the ownership splits as stated.</p>
      <div style="border: 2px dashed #9333ea; padding: 30px; text-align: center; border-radius: 8px;">
        <p style="margin: 0; color: #666;">Sign here: ____________________________</p>
        <p style="margin: 10px 0 0; font-size: 12px; color: #666;">Date: ____________________________</p>
      </div>
    </div>
    <div style="padding: 20px; text-align: center; background: #0a0a1a; font-size: 12px; color: #666;">
      <p style="margin: 0;">Sent via Artist Shield Split Sheet</p>
    </div>
  </div>
</body>
</html>
"""


class SplitSheetNotifier:
    def __init__(self, mailer: ResendMailer):
        self.mailer = mailer

    async def send(self, song_info: SongInfo, writers: Sequence[Writer]) -> int:
        """Email the split sheet to every participant concurrently.

        Returns the number of emails sent. Any rejected send fails the whole
        call with the provider's error; there is no per-recipient retry.
        """
        recipients = collect_recipients(writers)
        if not recipients:
            raise NoRecipientsError(NO_RECIPIENTS)

        logger.info(
            "Sending split sheet for %r to %d recipient(s)", song_info.title, len(recipients)
        )
        subject = build_subject(song_info)
        await asyncio.gather(
            *(
                self.mailer.send(
                    recipient.email,
                    subject,
                    render_split_sheet_html(song_info, writers, recipient.name),
                )
                for recipient in recipients
            )
        )
        return len(recipients)
