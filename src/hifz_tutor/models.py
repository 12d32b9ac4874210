"""Data classes for the memorisation review domain model."""
from dataclasses import dataclass, field
from typing import Optional

PRACTICE_CATEGORIES = ("memorisation", "fluency", "understanding")

SMOOTH = "smooth"
WEAK = "weak"

IN_PROGRESS = "in_progress"
COMPLETED = "completed"


@dataclass
class Surah:
    number: int
    name_english: str
    name_arabic: str
    verses: int
    juz: list = field(default_factory=list)


@dataclass(frozen=True)
class PassageUnit:
    surah: int
    start_ayah: int
    end_ayah: int
    label: str = ""

    def __post_init__(self):
        if self.start_ayah < 1 or self.start_ayah > self.end_ayah:
            raise ValueError(
                f"Invalid ayah range {self.start_ayah}-{self.end_ayah} for surah {self.surah}"
            )

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.surah, self.start_ayah, self.end_ayah)


@dataclass(frozen=True)
class Assessment:
    outcome: str
    weaknesses: frozenset = frozenset()

    @classmethod
    def smooth(cls) -> "Assessment":
        return cls(SMOOTH)

    @classmethod
    def weak(cls, *categories: str) -> "Assessment":
        return cls(WEAK, frozenset(categories))

    @property
    def is_weak(self) -> bool:
        return self.outcome == WEAK


@dataclass(frozen=True)
class ReviewState:
    listen_count: int = 0
    recite_count: int = 0
    assessment: Optional[Assessment] = None
    quality: int = 0
    practice_done: frozenset = frozenset()


@dataclass
class SessionPassage:
    passage: PassageUnit
    state: ReviewState = field(default_factory=ReviewState)

    def to_dict(self) -> dict:
        assessment = self.state.assessment
        return {
            "surah": self.passage.surah,
            "start_ayah": self.passage.start_ayah,
            "end_ayah": self.passage.end_ayah,
            "label": self.passage.label,
            "listen_count": self.state.listen_count,
            "recite_count": self.state.recite_count,
            "assessment": assessment.outcome if assessment else None,
            "weaknesses": sorted(assessment.weaknesses) if assessment else [],
            "practice_done": sorted(self.state.practice_done),
            "quality": self.state.quality,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionPassage":
        passage = PassageUnit(
            surah=data["surah"],
            start_ayah=data["start_ayah"],
            end_ayah=data["end_ayah"],
            label=data.get("label", ""),
        )
        assessment = None
        if data.get("assessment"):
            assessment = Assessment(data["assessment"], frozenset(data.get("weaknesses", [])))
        state = ReviewState(
            listen_count=data.get("listen_count", 0),
            recite_count=data.get("recite_count", 0),
            assessment=assessment,
            quality=data.get("quality", 0),
            practice_done=frozenset(data.get("practice_done", [])),
        )
        return cls(passage, state)


@dataclass
class DailySession:
    id: Optional[int]
    learner_id: int
    session_date: str
    passages: list = field(default_factory=list)
    tasks_completed: int = 0
    total_tasks: int = 0
    status: str = IN_PROGRESS
    completed_at: Optional[str] = None

    @property
    def states(self) -> list:
        return [p.state for p in self.passages]

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


@dataclass
class LearnerStreakState:
    current_streak: int = 0
    longest_streak: int = 0
    total_sessions: int = 0
    last_completion_date: Optional[str] = None
    rotation_cursor: int = 0
