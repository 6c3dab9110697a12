"""
Run Results
============

Pydantic v2 models for one machine run: a :class:`RunResult` carries
the enciphered message payload in ``metadata`` together with the
:class:`Finding` diagnostics raised while the message was typed, such
as plugboard entries that could not be plugged.

References:
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import datetime as _dt
import json as _json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


class Severity(str, Enum):
    """How much a diagnostic affects the ciphertext.

    Attributes:
        WARNING: Operator input was ignored, so the wiring differs from
                 what was typed.
        NOTICE:  The run completed but did nothing useful.
    """

    WARNING = "WARNING"
    NOTICE = "NOTICE"


class Finding(BaseModel):
    """A diagnostic raised during a run.

    ``evidence`` accepts structured data (e.g. skipped plugboard chunks)
    and stores it as a JSON string.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    severity: Severity
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1)
    evidence: str = ""
    recommendation: str = ""

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence_as_json(cls, v: Any) -> str:
        if isinstance(v, str):
            return v
        return _json.dumps(v, ensure_ascii=False, default=str)


class RunResult(BaseModel):
    """One machine run as reported by the CLI.

    Attributes:
        tool_name:  Producing tool, always ``enigma`` here.
        target:     Message text, truncated for display.
        start_time: UTC time the run started.
        end_time:   UTC time :meth:`finalize` was called.
        findings:   Diagnostics in the order they were raised.
        summary:    One-line description of the run.
        metadata:   Run payload (an ``EncryptionResult`` dump).
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(..., min_length=1)
    target: str = ""
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = None
    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)

    def finalize(self, summary: str) -> RunResult:
        """Stamp *end_time*, record *summary* and return ``self``."""
        self.end_time = _utcnow()
        self.summary = summary
        return self
