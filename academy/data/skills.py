from __future__ import annotations

from typing import Dict, List

from ..models.student import SkillAchievement, empty_quality


class SkillCatalog:
    def __init__(self, data: Dict[str, object]):
        self.categories: Dict[str, str] = dict(data.get("categories", {}))
        self.skills: List[Dict[str, str]] = list(data.get("skills", []))

    def default_achievements(self) -> List[SkillAchievement]:
        return [
            SkillAchievement(
                id=f"skill-{i}",
                skill_name=s["name"],
                category=s["category"],
                status="not_started",
                quality=empty_quality(),
            )
            for i, s in enumerate(self.skills)
        ]

    def category_label(self, category: str) -> str:
        return self.categories.get(category, category)
