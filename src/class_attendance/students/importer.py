"""Bulk student import from registrar CSV exports.

Expected header (any order, case-insensitive)::

    student_id,name,email,year_level,section

`section` holds a registrar code such as ``BSIT-3A`` or ``BSCS 2B``: program
letters, then the year level digit, then the block letter(s). The code is
resolved to an existing section; the student's course comes from it.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..common.validators import require_email
from ..core.constants import YEAR_LEVELS
from ..core.exceptions import ValidationError
from ..sections.model import Section
from ..sections.repository import SectionRepository
from .model import StudentDraft
from .repository import StudentRepository

logger = logging.getLogger(__name__)

SECTION_CODE_RE = re.compile(r"^(?P<program>[A-Za-z]+)[\s-]*(?P<year>\d)(?P<block>[A-Za-z]{1,2})$")

REQUIRED_COLUMNS = ("student_id", "name", "email", "section")

_HEADER_ALIASES = {
    "id": "student_id",
    "student id": "student_id",
    "student_no": "student_id",
    "full_name": "name",
    "full name": "name",
    "year": "year_level",
    "year level": "year_level",
    "section_code": "section",
    "section code": "section",
}


@dataclass(frozen=True)
class SectionCode:
    program: str
    year_level: int
    block: str

    @property
    def section_name(self) -> str:
        return f"{self.year_level}{self.block}"


@dataclass(frozen=True)
class ImportIssue:
    line: int
    message: str
    student_id: Optional[str] = None


@dataclass
class ImportPlan:
    to_create: list[StudentDraft] = field(default_factory=list)
    duplicates: list[ImportIssue] = field(default_factory=list)
    errors: list[ImportIssue] = field(default_factory=list)


@dataclass(frozen=True)
class ImportResult:
    created: int
    duplicates: list[ImportIssue]
    errors: list[ImportIssue]


def parse_section_code(value: str) -> SectionCode:
    m = SECTION_CODE_RE.match((value or "").strip())
    if not m:
        raise ValidationError(f"Section code {value!r} is not valid (expected e.g. BSIT-3A)")

    year_level = int(m.group("year"))
    if year_level not in YEAR_LEVELS:
        raise ValidationError(f"Section code {value!r} has an invalid year level")

    return SectionCode(
        program=m.group("program").upper(),
        year_level=year_level,
        block=m.group("block").upper(),
    )


def _normalize_header(cell: str) -> str:
    key = cell.strip().lstrip("\ufeff").strip().lower()
    return _HEADER_ALIASES.get(key, key.replace(" ", "_"))


class StudentCsvImporter:
    def __init__(self, students: StudentRepository, sections: SectionRepository):
        self._students = students
        self._sections = sections

    def _read_rows(self, text: str) -> tuple[dict[str, int], list[tuple[int, list[str]]]]:
        reader = csv.reader(io.StringIO(text.lstrip("\ufeff")), skipinitialspace=True)
        header: Optional[dict[str, int]] = None
        rows: list[tuple[int, list[str]]] = []

        for cells in reader:
            if not any(c.strip() for c in cells):
                continue
            if header is None:
                header = {_normalize_header(c): i for i, c in enumerate(cells)}
                missing = [col for col in REQUIRED_COLUMNS if col not in header]
                if missing:
                    raise ValidationError(f"CSV header is missing column(s): {', '.join(missing)}")
                continue
            rows.append((reader.line_num, cells))

        if header is None:
            raise ValidationError("CSV file is empty")
        return header, rows

    def _resolve_section(self, code: SectionCode, cache: dict[SectionCode, Optional[Section]]) -> Section:
        if code not in cache:
            cache[code] = self._sections.find_by_program_and_name(code.program, code.section_name)
        section = cache[code]
        if not section:
            raise ValidationError(f"Section {code.program}-{code.section_name} does not exist")
        return section

    def preview(self, text: str) -> ImportPlan:
        header, rows = self._read_rows(text)
        plan = ImportPlan()
        section_cache: dict[SectionCode, Optional[Section]] = {}
        parsed: list[tuple[int, StudentDraft]] = []

        def cell(cells: list[str], column: str) -> str:
            idx = header.get(column)
            if idx is None or idx >= len(cells):
                return ""
            return cells[idx].strip()

        for line, cells in rows:
            student_id = cell(cells, "student_id")
            try:
                if not student_id:
                    raise ValidationError("Student ID is required")
                name = cell(cells, "name")
                if not name:
                    raise ValidationError("Name is required")
                email = require_email(cell(cells, "email"))

                code = parse_section_code(cell(cells, "section"))
                section = self._resolve_section(code, section_cache)

                year_raw = cell(cells, "year_level")
                if year_raw:
                    if not year_raw.isdigit() or int(year_raw) not in YEAR_LEVELS:
                        raise ValidationError("Year level must be between 1 and 4")
                    year_level = int(year_raw)
                else:
                    year_level = code.year_level
            except ValidationError as e:
                plan.errors.append(ImportIssue(line=line, message=str(e), student_id=student_id or None))
                continue

            parsed.append(
                (
                    line,
                    StudentDraft(
                        student_id=student_id,
                        name=name,
                        email=email,
                        year_level=year_level,
                        section_id=section.section_id,
                        course_id=section.course_id,
                    ),
                )
            )

        # student_id keys compare case-insensitively in the database
        existing = {sid.casefold() for sid in self._students.existing_ids(d.student_id for _, d in parsed)}
        seen: set[str] = set()
        for line, draft in parsed:
            key = draft.student_id.casefold()
            if key in existing:
                plan.duplicates.append(ImportIssue(line, "Student ID already exists", draft.student_id))
            elif key in seen:
                plan.duplicates.append(ImportIssue(line, "Student ID repeated in file", draft.student_id))
            else:
                seen.add(key)
                plan.to_create.append(draft)

        return plan

    def commit(self, text: str) -> ImportResult:
        plan = self.preview(text)
        created = self._students.create_many(plan.to_create)
        logger.info(
            "Student import: created=%d duplicates=%d errors=%d",
            created,
            len(plan.duplicates),
            len(plan.errors),
        )
        return ImportResult(created=created, duplicates=plan.duplicates, errors=plan.errors)
