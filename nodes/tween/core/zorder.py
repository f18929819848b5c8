"""Relative z-order resolution from interpolated zIndex values."""

from typing import Dict, List, Optional, Sequence


def resolve_z_order(order: Sequence[str], z_values: Dict[str, Optional[int]]) -> List[str]:
    """
    Restack objects so those with a zIndex sit in ascending zIndex order.

    Participants are sorted ascending (ties keep their current stacking)
    and brought to front one by one, so the highest zIndex ends up on
    top. Objects without a zIndex keep their relative order beneath them.
    Applying the result again with the same values changes nothing.

    Args:
        order: Object ids, back to front
        z_values: Interpolated zIndex per object id; None means no zIndex

    Returns:
        New back-to-front order
    """
    position = {object_id: i for i, object_id in enumerate(order)}
    participants = [
        object_id for object_id in order
        if z_values.get(object_id) is not None
    ]
    participants.sort(key=lambda object_id: (z_values[object_id], position[object_id]))

    result = list(order)
    for object_id in participants:
        result.remove(object_id)
        result.append(object_id)
    return result


__all__ = ["resolve_z_order"]
