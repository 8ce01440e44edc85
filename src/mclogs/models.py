"""Data models returned by the mclo.gs API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LogLine:
    """A single numbered line of the original log."""

    number: int
    content: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogLine:
        return cls(number=data.get("number", 0), content=data.get("content", ""))


@dataclass(frozen=True)
class LogEntry:
    """A slice of the log the analysis refers to.

    ``time`` is null for log formats without timestamps.
    """

    level: int
    time: str | None
    prefix: str
    lines: list[LogLine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> LogEntry:
        data = data or {}
        return cls(
            level=data.get("level", 0),
            time=data.get("time"),
            prefix=data.get("prefix", ""),
            lines=[LogLine.from_dict(line) for line in data.get("lines") or []],
        )


@dataclass(frozen=True)
class Solution:
    message: str


@dataclass(frozen=True)
class Problem:
    """A problem detected in the log, with candidate solutions."""

    message: str
    counter: int
    entry: LogEntry
    solutions: list[Solution] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Problem:
        return cls(
            message=data.get("message", ""),
            counter=data.get("counter", 0),
            entry=LogEntry.from_dict(data.get("entry")),
            solutions=[
                Solution(message=s.get("message", "")) for s in data.get("solutions") or []
            ],
        )


@dataclass(frozen=True)
class Information:
    """A label/value fact parsed from the log (e.g. game version)."""

    message: str
    counter: int
    label: str
    value: str
    entry: LogEntry

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Information:
        return cls(
            message=data.get("message", ""),
            counter=data.get("counter", 0),
            label=data.get("label", ""),
            value=str(data.get("value", "")),
            entry=LogEntry.from_dict(data.get("entry")),
        )


@dataclass(frozen=True)
class Analysis:
    problems: list[Problem] = field(default_factory=list)
    information: list[Information] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Analysis:
        data = data or {}
        return cls(
            problems=[Problem.from_dict(p) for p in data.get("problems") or []],
            information=[Information.from_dict(i) for i in data.get("information") or []],
        )


@dataclass(frozen=True)
class PasteResult:
    """A successfully stored paste."""

    id: str
    url: str
    raw_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PasteResult:
        return cls(id=data["id"], url=data["url"], raw_url=data.get("raw", ""))


@dataclass(frozen=True)
class InsightsResult:
    """Analysis of a paste: detected software, title and findings."""

    id: str
    name: str
    type: str
    version: str
    title: str
    analysis: Analysis

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InsightsResult:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            type=data.get("type", ""),
            version=str(data.get("version") or ""),
            title=data.get("title", ""),
            analysis=Analysis.from_dict(data.get("analysis")),
        )


@dataclass(frozen=True)
class Limits:
    """Storage limits advertised by the service."""

    storage_time_seconds: int
    max_content_length: int
    max_lines: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Limits:
        return cls(
            storage_time_seconds=data["storageTime"],
            max_content_length=data["maxLength"],
            max_lines=data["maxLines"],
        )
