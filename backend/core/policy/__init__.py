from .policy_adjuster import adjust_status, infer_tags, severity_for_basis

__all__ = [
    "adjust_status",
    "infer_tags",
    "severity_for_basis",
]
