"""Prompt templates for document summarization and free-form questions.

Instruction blocks are exposed as module constants so they can be shown
or reviewed alongside the prompts that use them.
"""
from __future__ import annotations

from typing import Dict, Optional, Union

from ..documents.models import SummaryType

# ------------------------------------------------------------------
# Document preamble  (the {variables} are filled at runtime)
# ------------------------------------------------------------------

CONTENT_BEGIN = "--- เนื้อหาเอกสาร ---"
CONTENT_END = "--- จบเนื้อหา ---"

DOCUMENT_PREAMBLE = """\
คุณได้รับเอกสารชื่อ "{file_name}" กรุณาวิเคราะห์และสรุปเนื้อหาต่อไปนี้:

--- เนื้อหาเอกสาร ---
{content}
--- จบเนื้อหา ---

"""

# ------------------------------------------------------------------
# Instruction blocks, one per summary type
# ------------------------------------------------------------------

EXECUTIVE_INSTRUCTIONS = """\
กรุณาสรุปแบบ Executive Summary:
1. สรุปภาพรวม (1-2 ประโยค)
2. ประเด็นสำคัญ 3-5 ข้อ
3. ข้อเสนอแนะหรือ Action Items
4. สิ่งที่ต้องระวัง/ความเสี่ยง (ถ้ามี)"""

FINANCIAL_INSTRUCTIONS = """\
กรุณาวิเคราะห์ด้านการเงิน:
1. สรุปตัวเลขทางการเงินที่สำคัญ
2. แนวโน้มและการเปลี่ยนแปลง
3. ความเสี่ยงทางการเงิน
4. ข้อเสนอแนะ"""

LEGAL_INSTRUCTIONS = """\
กรุณาวิเคราะห์ด้านกฎหมาย:
1. สรุปข้อกำหนดสำคัญ
2. ภาระผูกพันของแต่ละฝ่าย
3. ข้อควรระวังทางกฎหมาย
4. วันที่และเงื่อนไขสำคัญ"""

TRADE_INSTRUCTIONS = """\
กรุณาวิเคราะห์เอกสาร Trade Finance:
1. ประเภทธุรกรรม (L/C, T/R, Invoice, etc.)
2. คู่สัญญาและบทบาท
3. มูลค่าและเงื่อนไขการชำระเงิน
4. เอกสารที่เกี่ยวข้อง
5. ความเสี่ยงและข้อควรระวัง"""

GENERAL_INSTRUCTIONS = """\
กรุณาสรุป:
1. ภาพรวมของเอกสาร
2. ประเด็นสำคัญ
3. รายละเอียดที่ควรทราบ
4. ข้อสรุปและข้อเสนอแนะ"""

SUMMARY_INSTRUCTIONS: Dict[SummaryType, str] = {
    SummaryType.GENERAL: GENERAL_INSTRUCTIONS,
    SummaryType.EXECUTIVE: EXECUTIVE_INSTRUCTIONS,
    SummaryType.FINANCIAL: FINANCIAL_INSTRUCTIONS,
    SummaryType.LEGAL: LEGAL_INSTRUCTIONS,
    SummaryType.TRADE: TRADE_INSTRUCTIONS,
}

# ------------------------------------------------------------------
# Free-form questions
# ------------------------------------------------------------------

QUESTION_LABEL = "คำถาม:"


def build_prompt(
    content: str,
    file_name: str,
    summary_type: Union[SummaryType, str, None] = SummaryType.GENERAL,
) -> str:
    """Compose the summarization prompt for one document.

    Parameters
    ----------
    content : str
        Extracted document text, embedded verbatim between the markers.
    file_name : str
        Original file name, quoted in the preamble.
    summary_type : SummaryType or str
        Selects the instruction block; unknown values use ``general``.
    """
    preamble = DOCUMENT_PREAMBLE.format(file_name=file_name, content=content)
    return preamble + SUMMARY_INSTRUCTIONS[SummaryType.parse(summary_type)]


def build_question(question: str, context: Optional[str] = None) -> str:
    """Prefix *question* with caller-supplied context, if there is any."""
    if not context or not context.strip():
        return question
    return f"{context}\n\n{QUESTION_LABEL} {question}"
