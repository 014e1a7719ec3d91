"""Guardrail rules for classifier output"""
from typing import Any, List

MAX_RECOMMENDATIONS = 3
MAX_RECOMMENDATION_LENGTH = 300
MAX_NICHE_LENGTH = 80

def validate_seo_payload(data: Any) -> List[str]:
    """Validate a parsed classifier payload; returns the list of violations"""
    violations = []

    if not isinstance(data, dict):
        return [f"Payload must be a JSON object, got {type(data).__name__}"]

    # Score: numeric (not bool), 0-100
    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        violations.append(f"Score must be numeric: {score!r}")
    elif not 0 <= score <= 100:
        violations.append(f"Score {score} not in range 0-100")

    # Niche: non-empty short label
    niche = data.get("niche")
    if not isinstance(niche, str) or not niche.strip():
        violations.append(f"Niche must be a non-empty string: {niche!r}")
    elif len(niche) > MAX_NICHE_LENGTH:
        violations.append(f"Niche longer than {MAX_NICHE_LENGTH} chars")

    # Recommendations: bounded list of strings
    recommendations = data.get("recommendations")
    if not isinstance(recommendations, list):
        violations.append(f"Recommendations must be a list: {recommendations!r}")
    else:
        if len(recommendations) > MAX_RECOMMENDATIONS:
            violations.append(
                f"Too many recommendations ({len(recommendations)}, max {MAX_RECOMMENDATIONS})"
            )
        for i, item in enumerate(recommendations):
            if not isinstance(item, str):
                violations.append(f"Recommendation {i+1} must be a string")
            elif len(item) > MAX_RECOMMENDATION_LENGTH:
                violations.append(f"Recommendation {i+1} longer than {MAX_RECOMMENDATION_LENGTH} chars")

    return violations
