"""
Groups struct fields into sub-messages by the leading PascalCase words of their names.
"""
import re
import sys
from typing import Dict, List

from struct_errors import InvalidConfigurationError
from struct_model import Field

UNGROUPED = "ungrouped"

# Grouping threshold that no field name can reach
GROUPING_DISABLED = sys.maxsize

PASCAL_CASE_WORD = re.compile(r'[A-Z][a-z]*')


def validate_grouping_threshold(threshold: int) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidConfigurationError(f"grouping value must be an integer, got {threshold!r}")
    if threshold == 0:
        raise InvalidConfigurationError("grouping value cannot be 0")
    if threshold < 0:
        raise InvalidConfigurationError(f"grouping value must be positive, got {threshold}")


def sort_fields_by_name(fields: List[Field]) -> List[Field]:
    """Return the fields ordered by their first name."""
    return sorted(fields, key=lambda field: field.name)


def split_pascal_case(name: str) -> List[str]:
    return PASCAL_CASE_WORD.findall(name)


def group_fields_by_pascal_case(fields: List[Field], threshold: int) -> Dict[str, List[Field]]:
    """
    Partition fields by the concatenation of the first `threshold` PascalCase words of their name.

    Fields with fewer words, and fields that would be alone in their group, end up under
    UNGROUPED. Every other key maps to two or more fields in name order.
    """
    validate_grouping_threshold(threshold)
    groups: Dict[str, List[Field]] = {}
    ungrouped: List[Field] = []

    for field in sort_fields_by_name(fields):
        words = split_pascal_case(field.name)
        if len(words) >= threshold:
            key = ''.join(words[:threshold])
            groups.setdefault(key, []).append(field)
        else:
            ungrouped.append(field)

    # Single-member groups are dissolved
    for key in [k for k, members in groups.items() if len(members) == 1]:
        ungrouped.append(groups.pop(key)[0])

    result = {UNGROUPED: ungrouped}
    result.update(groups)
    return result
