"""Achievement rules evaluated against user statistics."""

from collections.abc import Callable
from dataclasses import dataclass, replace

from naijafit.domain.stats import UserStats

FIRST_MEAL_LOGGED = "First Meal Logged"
CONSISTENT_LOGGER = "Consistent Logger"
WEEK_WARRIOR = "Week Warrior"
MONTHLY_MASTER = "Monthly Master"


@dataclass(frozen=True)
class AchievementRule:
    """Named threshold predicate over user stats."""

    name: str
    predicate: Callable[[UserStats], bool]


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(FIRST_MEAL_LOGGED, lambda stats: stats.total_meals_logged == 1),
    AchievementRule(CONSISTENT_LOGGER, lambda stats: stats.total_meals_logged == 10),
    AchievementRule(WEEK_WARRIOR, lambda stats: stats.current_streak >= 7),
    AchievementRule(MONTHLY_MASTER, lambda stats: stats.longest_streak >= 30),
)


def newly_unlocked(
    stats: UserStats, rules: tuple[AchievementRule, ...] = ACHIEVEMENT_RULES
) -> list[str]:
    """Return names whose predicate holds and that are not yet unlocked."""
    return [
        rule.name
        for rule in rules
        if rule.name not in stats.achievements and rule.predicate(stats)
    ]


def evaluate_achievements(
    stats: UserStats, rules: tuple[AchievementRule, ...] = ACHIEVEMENT_RULES
) -> UserStats:
    """Append newly unlocked achievements in rule order."""
    unlocked = newly_unlocked(stats, rules)
    if not unlocked:
        return stats
    return replace(stats, achievements=(*stats.achievements, *unlocked))
