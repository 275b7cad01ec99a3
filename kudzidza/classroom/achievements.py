"""
Achievement rules evaluated after every lesson completion.

Each rule checks only its own threshold. Titles are the uniqueness key, so a
rule can award its achievement at most once per learner.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from kudzidza.schemas import Achievement, UserProgress


@dataclass(frozen=True)
class AchievementRule:
    """Threshold rule that awards one titled achievement."""
    title: str
    description: str
    icon_name: str
    xp_required: Optional[int] = None
    streak_required: Optional[int] = None

    def is_met(self, progress: UserProgress) -> bool:
        if self.xp_required is not None and progress.total_xp < self.xp_required:
            return False
        if self.streak_required is not None and progress.current_streak < self.streak_required:
            return False
        return self.xp_required is not None or self.streak_required is not None

    def award(self, now: datetime) -> Achievement:
        return Achievement(
            title=self.title,
            description=self.description,
            icon_name=self.icon_name,
            xp_required=self.xp_required,
            streak_required=self.streak_required,
            is_unlocked=True,
            unlocked_date=now,
        )


WEEK_WARRIOR = AchievementRule(
    title="Week Warrior",
    description="Study for 7 days in a row",
    icon_name="flame.fill",
    streak_required=7,
)

XP_MASTER = AchievementRule(
    title="XP Master",
    description="Earn 1000 XP",
    icon_name="star.fill",
    xp_required=1000,
)

ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (WEEK_WARRIOR, XP_MASTER)


def evaluate_achievements(
    progress: UserProgress,
    now: datetime,
    rules: tuple[AchievementRule, ...] = ACHIEVEMENT_RULES,
) -> list[Achievement]:
    """
    Return achievements newly earned by progress (does not mutate it).

    A rule fires when its threshold holds and no earned achievement shares
    its title.
    """
    earned = []
    for rule in rules:
        if rule.is_met(progress) and not progress.has_achievement(rule.title):
            earned.append(rule.award(now))
    return earned
