from __future__ import annotations

import threading
from datetime import date

from hr_records.core.enums import MarkAction
from hr_records.core.exceptions import ConflictError

DAY = date(2024, 1, 10)
WORKERS = 8


def _race(fn):
    barrier = threading.Barrier(WORKERS)
    results: list[object] = []
    lock = threading.Lock()

    def run():
        barrier.wait()
        try:
            out = fn()
        except ConflictError as e:
            out = e
        with lock:
            results.append(out)

    threads = [threading.Thread(target=run) for _ in range(WORKERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


def test_concurrent_creates_leave_one_record(container, employee):
    results = _race(lambda: container.attendance_service.create(employee_id=employee.employee_id, work_date=DAY))

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(conflicts) == WORKERS - 1
    assert container.attendance_repo.count(employee_id=employee.employee_id) == 1


def test_concurrent_check_ins_leave_one_record(container, employee):
    results = _race(
        lambda: container.attendance_service.mark(
            employee_id=employee.employee_id, work_date=DAY, action=MarkAction.CHECK_IN
        )
    )

    assert sum(1 for r in results if not isinstance(r, ConflictError)) == 1
    assert container.attendance_repo.count(employee_id=employee.employee_id) == 1
