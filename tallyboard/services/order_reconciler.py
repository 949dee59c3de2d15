"""Display order reconciliation for the tally board."""

from typing import Iterable, List, Sequence


def reconcile(current_order: Sequence[str], all_names: Iterable[str]) -> List[str]:
    """
    Merge a persisted order with the current set of names.

    Names in the configured order that still exist come first (in that
    order), followed by any new names in their enumeration order.

    Args:
        current_order: Previously saved display order
        all_names: Current names, builtins first then customs

    Returns:
        New display order containing every current name exactly once
    """
    names = list(dict.fromkeys(all_names))
    present = set(names)

    result = [name for name in dict.fromkeys(current_order) if name in present]
    placed = set(result)
    result.extend(name for name in names if name not in placed)

    return result


def apply_move(order: Sequence[str], source: str, target: str) -> List[str]:
    """Move ``source`` to the position held by ``target``."""
    new_order = list(order)
    if source == target or source not in new_order or target not in new_order:
        return new_order

    old_index = new_order.index(source)
    new_index = new_order.index(target)
    new_order.insert(new_index, new_order.pop(old_index))
    return new_order
