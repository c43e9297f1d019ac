from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.stats import AttendanceStatsService
from .common.clock import Clock, SystemClock
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import InMemoryDatabase
from .departments.memory_department_repository import InMemoryDepartmentRepository
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .integrity.guard import IntegrityGuard
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService

logger = logging.getLogger(__name__)

BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Union[DatabaseConnection, InMemoryDatabase]
    clock: Clock

    users_repo: UserRepository
    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    guard: IntegrityGuard
    auth_service: AuthService
    department_service: DepartmentService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    attendance_stats_service: AttendanceStatsService
    dashboard_service: DashboardService

    def close(self) -> None:
        self.conn.close()


def build_container(*, db_config: Optional[dict] = None, backend: str = "mysql", clock: Optional[Clock] = None) -> Container:
    """Wire repositories and services over one storage handle.

    The handle is owned by the container; call `close()` at shutdown.
    """
    clock = clock or SystemClock()

    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        conn: Union[DatabaseConnection, InMemoryDatabase] = DatabaseConnection(DBConfig.from_dict(db_config))
        users_repo: UserRepository = MySQLUserRepository(conn)
        departments_repo: DepartmentRepository = MySQLDepartmentRepository(conn)
        employees_repo: EmployeeRepository = MySQLEmployeeRepository(conn)
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
    elif backend == "memory":
        conn = InMemoryDatabase()
        users_repo = InMemoryUserRepository(conn)
        departments_repo = InMemoryDepartmentRepository(conn)
        employees_repo = InMemoryEmployeeRepository(conn)
        attendance_repo = InMemoryAttendanceRepository(conn)
    else:
        raise ValueError(f"Unknown DB_BACKEND {backend!r}; expected one of {', '.join(BACKENDS)}")

    logger.info("Storage backend: %s", backend)

    guard = IntegrityGuard(employees_repo, departments_repo, attendance_repo)

    return Container(
        conn=conn,
        clock=clock,
        users_repo=users_repo,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        guard=guard,
        auth_service=AuthService(users_repo),
        department_service=DepartmentService(departments_repo, employees_repo, guard),
        employee_service=EmployeeService(employees_repo, guard, clock),
        attendance_service=AttendanceService(attendance_repo, guard, clock),
        attendance_stats_service=AttendanceStatsService(attendance_repo, clock),
        dashboard_service=DashboardService(employees_repo, departments_repo, attendance_repo, clock),
    )
