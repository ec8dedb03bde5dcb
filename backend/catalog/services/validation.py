"""
Library Catalog Backend — Form Validation & Sanitization
==========================================================

What:  Declarative per-field rule chains for HTML form input.
How:   A field's rules are an ordered tuple of steps. A step is either a
       sanitizer (value → new value) or a check (predicate + message). Every
       step of every field runs; a failing check records an error and the chain
       carries on, so one submission reports all of its problems at once.

Example:
    first_name = (
        FieldRules("first_name")
        .trim()
        .required("First name must be specified.")
        .escape()
        .alphanumeric("First name has non-alphanumeric characters.")
    )
    result = validate([first_name], {"first_name": "  Jane "})
    result.values["first_name"]  # "Jane"

Optional fields (`optional=True`) skip their whole chain when the submitted
value is falsy and come out as None.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from markupsafe import escape as html_escape

from catalog.schemas.author import FieldError


_ALPHANUMERIC = re.compile(r"^[0-9A-Za-z]+$")
_YEAR = re.compile(r"^\d{4}$")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


# ══════════════════════════════════════════════════════════════════════════
# Steps
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Sanitizer:
    transform: Callable[[Any], Any]


@dataclass(frozen=True)
class Check:
    predicate: Callable[[Any], bool]
    message: str


Step = Union[Sanitizer, Check]


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse an ISO-8601 calendar date or date-time into a date.

    Accepts "YYYY", "YYYY-MM", any form `date.fromisoformat` understands
    (including "YYYYMMDD" and week dates) and full date-times, whose time part
    is dropped. Surrounding whitespace is not accepted. Returns None for
    anything else, including out-of-range years such as "0000".
    """
    text = _to_text(value)
    if not text:
        return None
    if _YEAR.fullmatch(text):
        try:
            return date(int(text), 1, 1)
        except ValueError:
            return None
    match = _YEAR_MONTH.fullmatch(text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), 1)
        except ValueError:
            return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


# ══════════════════════════════════════════════════════════════════════════
# Field rule chains
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FieldRules:
    """
    Ordered validation/sanitization chain for one form field.

    Builder methods return a new FieldRules; instances are immutable and can
    be shared between forms.
    """

    name: str
    steps: Tuple[Step, ...] = field(default_factory=tuple)
    optional: bool = False

    def _with(self, step: Step) -> "FieldRules":
        return replace(self, steps=self.steps + (step,))

    # ── Sanitizers ────────────────────────────────────────────────────────
    def trim(self) -> "FieldRules":
        return self._with(Sanitizer(lambda v: _to_text(v).strip()))

    def escape(self) -> "FieldRules":
        # markupsafe.Markup is a str that templates will not escape again
        return self._with(Sanitizer(lambda v: html_escape(_to_text(v))))

    def to_date(self) -> "FieldRules":
        return self._with(Sanitizer(parse_iso_date))

    # ── Checks ────────────────────────────────────────────────────────────
    def required(self, message: str) -> "FieldRules":
        return self._with(Check(lambda v: len(_to_text(v)) >= 1, message))

    def alphanumeric(self, message: str) -> "FieldRules":
        return self._with(Check(lambda v: bool(_ALPHANUMERIC.match(_to_text(v))), message))

    def max_length(self, limit: int, message: str) -> "FieldRules":
        return self._with(Check(lambda v: len(_to_text(v)) <= limit, message))

    def iso8601(self, message: str) -> "FieldRules":
        return self._with(Check(lambda v: parse_iso_date(v) is not None, message))

    def optional_when_falsy(self) -> "FieldRules":
        return replace(self, optional=True)

    def run(self, raw: Any) -> Tuple[Any, List[FieldError]]:
        """Apply every step to `raw`; returns the sanitized value and the errors in step order."""
        if self.optional and not raw:
            return None, []

        value = raw
        errors: List[FieldError] = []
        for step in self.steps:
            if isinstance(step, Sanitizer):
                value = step.transform(value)
            elif not step.predicate(value):
                errors.append(FieldError(field=self.name, message=step.message))
        return value, errors


@dataclass
class ValidationResult:
    """Sanitized values for every declared field plus the accumulated errors."""

    values: Dict[str, Any]
    errors: List[FieldError]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate(rules: Sequence[FieldRules], form: Mapping[str, Any]) -> ValidationResult:
    """
    Run each field's chain over the submitted form.

    Errors are ordered by field declaration order, then by step order within
    a field. Fields absent from `form` are treated as None.
    """
    values: Dict[str, Any] = {}
    errors: List[FieldError] = []
    for rule in rules:
        value, field_errors = rule.run(form.get(rule.name))
        values[rule.name] = value
        errors.extend(field_errors)
    return ValidationResult(values=values, errors=errors)
