"""
project: Mouse Maze
module: models.py
License: MIT

Database models used by the score collaborator.

One row per difficulty holds the best (lowest) completion time together with
a few counters so the client can show "best of N runs".
"""

import datetime

from mazegame import db


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class BestTime(db.Model):
    """Best completion time for a difficulty.

    Attributes:
        difficulty: Difficulty name ('easy' | 'medium' | 'hard').
        seconds: Lowest elapsed time seen, in seconds.
        completions: Number of finished rounds at this difficulty.
        rounds_started: Number of rounds begun at this difficulty.
    """

    __tablename__ = "best_times"

    id = db.Column(db.Integer, primary_key=True)
    difficulty = db.Column(db.String(20), unique=True, nullable=False)
    seconds = db.Column(db.Float, nullable=True)
    completions = db.Column(db.Integer, nullable=False, default=0)
    rounds_started = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    @staticmethod
    def get(difficulty: str):
        return BestTime.query.filter_by(difficulty=difficulty).first()

    @staticmethod
    def get_or_create(difficulty: str) -> "BestTime":
        row = BestTime.get(difficulty)
        if not row:
            row = BestTime(difficulty=difficulty, completions=0, rounds_started=0)
            db.session.add(row)
        return row

    def to_dict(self):
        return {
            "difficulty": self.difficulty,
            "seconds": self.seconds,
            "completions": self.completions,
            "rounds_started": self.rounds_started,
        }

    def __repr__(self):
        return f"<BestTime {self.difficulty} seconds={self.seconds}>"
