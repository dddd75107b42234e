"""Pydantic schemas for JSON data validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class HoleResultRecord(BaseModel):
    """One hole result as stored by the scoring app."""

    hole: int = Field(..., ge=1)
    winner: str = Field(..., pattern=r'^(team_a|team_b|halved)$')
    recorded_at: datetime
    team_a_strokes: int | None = Field(None, ge=1)
    team_b_strokes: int | None = Field(None, ge=1)
    notes: str | None = None

    class Config:
        extra = 'forbid'


class MatchRecord(BaseModel):
    """Match pairing and its recorded hole results."""

    id: str = Field(..., min_length=1)
    match_order: int = Field(default=0, ge=0)
    total_holes: int | None = Field(None, ge=1, le=36)
    team_a: list[str] = Field(default_factory=list)
    team_b: list[str] = Field(default_factory=list)
    status: str = Field(default='scheduled', pattern=r'^(scheduled|in_progress|final|cancelled)$')
    hole_results: list[HoleResultRecord] = Field(default_factory=list)

    @field_validator('hole_results')
    @classmethod
    def validate_hole_numbers(cls, v, info):
        """Ensure no hole is numbered past the end of the match."""
        total_holes = info.data.get('total_holes')
        if total_holes is not None:
            for record in v:
                if record.hole > total_holes:
                    raise ValueError(f'Hole {record.hole} is past the end of a {total_holes}-hole match')
        return v

    class Config:
        extra = 'forbid'


class SessionRecord(BaseModel):
    """Ryder Cup session (e.g., Friday AM Foursomes)."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    session_type: str = Field(..., pattern=r'^(foursomes|fourball|singles)$')
    points_per_match: Decimal | None = Field(None, gt=0)
    matches: list[MatchRecord] = Field(default_factory=list)

    @field_validator('matches')
    @classmethod
    def validate_unique_match_ids(cls, v):
        """Ensure match ids are unique within the session."""
        ids = [m.id for m in v]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f'Duplicate match ids: {", ".join(duplicates)}')
        return v

    class Config:
        extra = 'forbid'


class TripFile(BaseModel):
    """Complete trip.json file structure."""

    name: str = Field(..., min_length=1)
    team_a_name: str | None = None
    team_b_name: str | None = None
    points_to_win: Decimal | None = Field(None, gt=0)
    sessions: list[SessionRecord] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


class TripConfig(BaseModel):
    """Trip-wide scoring defaults."""

    default_total_holes: int = Field(..., ge=1, le=36)
    default_points_per_match: Decimal = Field(..., gt=0)
    points_to_win: Decimal | None = Field(None, gt=0)
    team_a_name: str = Field(default='Team A', min_length=1)
    team_b_name: str = Field(default='Team B', min_length=1)
    momentum_window: int = Field(default=5, ge=1, le=18)

    class Config:
        extra = 'forbid'
