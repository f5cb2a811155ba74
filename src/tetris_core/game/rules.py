from __future__ import annotations

from dataclasses import dataclass


FRAMES_PER_SECOND = 60
LINES_PER_LEVEL = 10


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1000)

    def score_for_lines(self, lines: int, level: int = 0) -> int:
        if lines <= 0:
            return 0
        # A single pass never scores above a four-line clear
        base = self.line_clear_scores[min(lines, 4) - 1]
        return base * (level + 1)

    @staticmethod
    def level_for_lines(lines: int) -> int:
        return lines // LINES_PER_LEVEL

    @staticmethod
    def frames_per_drop(level: int) -> int:
        if level < 9:
            return 48 - level * 5
        if level == 9:
            return 6
        if level < 19:
            return 4
        if level < 29:
            return 2
        return 1

    def ms_per_tick(self, level: int) -> int:
        """Whole milliseconds between down-steps at ``level`` (60 fps, truncated)."""
        return self.frames_per_drop(level) * 1000 // FRAMES_PER_SECOND
