"""Category suggestion from owner-defined rules"""

from typing import List, Optional

from expense_insights.domain.models import CategoryRule


def match_category(description: str, rules: List[CategoryRule]) -> Optional[str]:
    """
    Pick the category of the best rule matching a description.

    Patterns match case-insensitively anywhere in the description. The longest
    matching pattern wins; ties go to the older rule (lower id).
    """
    text = description.strip().lower()
    if not text:
        return None

    candidates = [
        rule for rule in rules
        if rule.is_active and rule.pattern.strip() and rule.pattern.strip().lower() in text
    ]
    if not candidates:
        return None

    best = min(candidates, key=lambda r: (-len(r.pattern.strip()), r.id))
    return best.category
