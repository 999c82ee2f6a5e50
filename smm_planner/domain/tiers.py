"""
Tier task catalog - static task templates per service tier.

Each template anchors to a day of month. Tier 3 additionally posts daily:
one "Schedule daily posts" content task for every day 2..N of the month,
so its expansion depends on the month length.

Tiers:
- 1 Basic: 2 platforms, weekly posting, monthly report
- 2 Standard: 4 platforms, custom graphics, $100 ad budget
- 3 Premium: 6 platforms, daily posting, influencers, weekly analytics
"""
import calendar
from dataclasses import dataclass


PRIORITIES = ("high", "medium", "low")
TASK_TYPES = ("setup", "content", "engagement", "reporting", "ads")


class InvalidTierError(ValueError):
    pass


@dataclass(frozen=True)
class TaskTemplate:
    title: str
    description: str
    priority: str
    estimated_time: str
    task_type: str
    recurring_day: int  # 1..31, clamped to the month length on expansion

    def __post_init__(self):
        if self.priority not in PRIORITIES:
            raise ValueError(f"invalid priority: {self.priority}")
        if self.task_type not in TASK_TYPES:
            raise ValueError(f"invalid task_type: {self.task_type}")
        if not 1 <= self.recurring_day <= 31:
            raise ValueError(f"recurring_day must be 1..31, got {self.recurring_day}")


def _on_days(days, title, description, priority, estimated_time, task_type) -> tuple[TaskTemplate, ...]:
    return tuple(
        TaskTemplate(title, description, priority, estimated_time, task_type, day)
        for day in days
    )


TIER_DEFINITIONS = {
    1: {
        "name": "Basic",
        "price": 500,
        "features": [
            "2 Social Media Platforms",
            "8 Posts per Month",
            "Basic Analytics Report",
            "10 Interactions/month",
        ],
    },
    2: {
        "name": "Standard",
        "price": 1200,
        "features": [
            "4 Social Media Platforms",
            "16 Posts per Month",
            "Custom Graphics",
            "Ad Management ($100)",
            "25 Interactions/month",
        ],
    },
    3: {
        "name": "Premium",
        "price": 2500,
        "features": [
            "6 Social Media Platforms",
            "30 Posts per Month",
            "Advanced Content Creation",
            "Influencer Collaboration",
            "Weekly Analytics",
        ],
    },
}


TIER_TASK_TEMPLATES: dict[int, tuple[TaskTemplate, ...]] = {
    1: (
        TaskTemplate(
            "Review/optimize social media profiles",
            "Update bios, images for 2 platforms",
            "high", "30 min", "setup", 1,
        ),
        *_on_days(
            (5, 12, 19, 26),
            "Schedule 2 posts/week", "Create and schedule content for the week",
            "medium", "45 min", "content",
        ),
        *_on_days(
            (10, 20),
            "Respond to comments/messages", "Up to 5 interactions per session",
            "medium", "20 min", "engagement",
        ),
        TaskTemplate(
            "Generate basic analytics report",
            "Monthly overview of engagement metrics",
            "high", "60 min", "reporting", 30,
        ),
    ),
    2: (
        TaskTemplate(
            "Review/optimize profiles on 4 platforms",
            "Update bios, images for all platforms",
            "high", "45 min", "setup", 1,
        ),
        *_on_days(
            (3, 10, 17, 24),
            "Schedule 4 posts/week", "Create and schedule content across platforms",
            "medium", "60 min", "content",
        ),
        *_on_days(
            (7, 14, 21, 28),
            "Create custom graphics", "Design graphics for 8 posts",
            "medium", "90 min", "content",
        ),
        TaskTemplate(
            "Set up ad campaign",
            "Configure campaign with $100 budget",
            "high", "45 min", "ads", 5,
        ),
        *_on_days(
            (15, 25),
            "Monitor/adjust ad performance", "Review and optimize ad targeting",
            "medium", "30 min", "ads",
        ),
        *_on_days(
            (10, 20, 30),
            "Respond to comments/messages", "Up to 8-9 interactions per session",
            "medium", "30 min", "engagement",
        ),
        TaskTemplate(
            "Generate detailed analytics report",
            "Monthly report with insights and recommendations",
            "high", "90 min", "reporting", 30,
        ),
    ),
    # Daily posts are the only content tasks in tier 3, see DAILY_POST_TEMPLATES;
    # the weekly creative batch is production prep, filed as setup
    3: (
        TaskTemplate(
            "Review/optimize profiles on 6 platforms",
            "Update bios, images for all major platforms",
            "high", "60 min", "setup", 1,
        ),
        TaskTemplate(
            "Set up advanced ad campaign",
            "Configure campaign with $300 budget",
            "high", "60 min", "ads", 5,
        ),
        *_on_days(
            (10, 20, 30),
            "Optimize ad targeting/performance", "Advanced targeting and performance optimization",
            "medium", "45 min", "ads",
        ),
        *_on_days(
            (7, 21),
            "Coordinate with micro-influencers", "Content planning and approvals with 1-2 influencers",
            "medium", "60 min", "engagement",
        ),
        *_on_days(
            (3, 17),
            "Research/update SEO-optimized hashtags", "Update hashtags and keywords for each platform",
            "low", "45 min", "engagement",
        ),
        *_on_days(
            (7, 14, 21, 28),
            "Respond to comments/messages", "Unlimited interactions within reason",
            "medium", "45 min", "engagement",
        ),
        *_on_days(
            (7, 14, 21, 28),
            "Generate weekly analytics report", "Detailed performance tracking with strategy adjustments",
            "high", "60 min", "reporting",
        ),
        *_on_days(
            (5, 12, 19, 26),
            "Create custom graphics/videos", "Advanced content for 22-23 posts",
            "high", "120 min", "setup",
        ),
    ),
}

# Day 1 is the setup day, daily posting starts on day 2
DAILY_POST_FIRST_DAY = 2

DAILY_POST_TEMPLATES: dict[int, tuple[str, str, str, str, str]] = {
    3: (
        "Schedule daily posts",
        "1-2 posts per day across platforms",
        "medium", "30 min", "content",
    ),
}


def validate_tier(tier) -> int:
    # bool is an int subclass; True must not pass as tier 1
    if not isinstance(tier, int) or isinstance(tier, bool) or tier not in TIER_TASK_TEMPLATES:
        raise InvalidTierError(f"Unknown tier: {tier!r}")
    return tier


def templates_for_month(tier: int, year: int, month: int) -> list[TaskTemplate]:
    """Fixed templates of the tier plus its daily expansion for the month."""
    validate_tier(tier)
    templates = list(TIER_TASK_TEMPLATES[tier])

    daily = DAILY_POST_TEMPLATES.get(tier)
    if daily:
        last = calendar.monthrange(year, month)[1]
        templates.extend(
            _on_days(range(DAILY_POST_FIRST_DAY, last + 1), *daily)
        )
    return templates
