from typing import Any, Mapping

from src.service.line_booking.domain.value_object.booking_time import format_time_label


NAME_PLACEHOLDER = '未入力'


def build_reservation_message(record: Mapping[str, Any], *, tz_name: str) -> str:
    """Confirmation text sent to the notifier for a persisted reservation."""
    start, end = record.get('start') or '', record.get('end') or ''
    label = format_time_label(start, end, tz_name=tz_name)
    when = ' '.join(part for part in (record.get('date') or '', label) if part)
    lines = [
        '🙇‍♀️ご予約ありがとうございます！',
        f'📌 お名前: {record.get("name") or NAME_PLACEHOLDER}',
        f'🗓 日時: {when or "-"}',
        f'🔑 予約ID: {record.get("id")}',
        '',
        '変更・キャンセルをご希望の場合はこちらからご連絡ください✨',
    ]
    return '\n'.join(lines)
