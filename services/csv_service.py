"""
CSV 服務：選手名單的匯入與匯出格式

匯入：
- 標題列必須有 name、club、category（不分大小寫），routine 可有可無
- 缺少必要值的資料列直接略過

匯出：
- 欄位 name,club,category,routine
- CRLF 換行，含逗號、引號、換行的欄位加上引號，內部引號重複一次（RFC 4180）
"""
import csv
import io
from dataclasses import dataclass
from typing import Iterable, List

from core.exceptions import InvalidCsv

REQUIRED_COLUMNS = ("name", "club", "category")
EXPORT_COLUMNS = ("name", "club", "category", "routine")


@dataclass(frozen=True)
class PerformerRow:
    name: str
    club: str
    category_name: str
    routine: str = ""


def _cell(record: List[str], index) -> str:
    if index is None or index >= len(record):
        return ""
    return record[index].strip()


def parse_performers_csv(text: str) -> List[PerformerRow]:
    """
    解析選手名單 CSV

    異常：
        InvalidCsv: 空檔案、缺少必要欄位或 CSV 格式錯誤
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    if not text.strip():
        raise InvalidCsv("CSV file is empty")

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        header = next(reader)
        columns = {name.strip().lower(): index for index, name in enumerate(header)}

        missing = [name for name in REQUIRED_COLUMNS if name not in columns]
        if missing:
            raise InvalidCsv(f"CSV is missing required columns: {', '.join(missing)}")

        routine_index = columns.get("routine")
        rows: List[PerformerRow] = []
        for record in reader:
            name = _cell(record, columns["name"])
            club = _cell(record, columns["club"])
            category_name = _cell(record, columns["category"])
            if not (name and club and category_name):
                continue

            rows.append(PerformerRow(
                name=name,
                club=club,
                category_name=category_name,
                routine=_cell(record, routine_index),
            ))
    except csv.Error as e:
        raise InvalidCsv(f"Malformed CSV at line {reader.line_num}: {e}") from e

    return rows


def serialize_performers_csv(rows: Iterable[PerformerRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow([row.name, row.club, row.category_name, row.routine])
    return buffer.getvalue()
