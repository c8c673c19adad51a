# app/core/task_state.py
"""
Связка статуса задачи с completed_at и расчёт изменений в наборе исполнителей.
"""
from datetime import datetime, timezone
from typing import Iterable, Optional, Set, Tuple

DONE = "DONE"

def apply_status(task, new_status: Optional[str], now: Optional[datetime] = None) -> bool:
    """
    Применяет новый статус к задаче и поддерживает completed_at:
    переход в DONE ставит отметку, любой другой статус её снимает.
    Возвращает True, если задача только что перешла в DONE.
    """
    if new_status is None:
        return False
    was_done = task.status == DONE
    task.status = new_status
    if new_status == DONE:
        if not was_done:
            task.completed_at = now or datetime.now(timezone.utc)
            return True
        return False
    task.completed_at = None
    return False

def diff_assignments(current: Iterable[int], desired: Iterable[int]) -> Tuple[Set[int], Set[int]]:
    """
    Возвращает (кого добавить, кого снять).
    """
    current_set, desired_set = set(current), set(desired)
    return desired_set - current_set, current_set - desired_set
