"""
EmployeeCycleService -- salary obligation status per employee.

Responsibility:
    Loads an employee and their salary payments (DEBIT ledger entries
    reconciled against the employee) and runs them through
    ``compute_obligation_cycle``.  Nothing is cached: the status is
    recomputed from the ledger on every call.

Invariants enforced:
    - Cycles are anchored at the employee's joining date and have a fixed
      length (31 days unless configured otherwise).
    - Only payments dated inside the open window count toward it.
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from billing_engines.obligation_cycle import (
    DEFAULT_CYCLE_LENGTH_DAYS,
    ObligationCycle,
    compute_obligation_cycle,
    current_cycle_window,
)
from billing_kernel.domain.clock import Clock
from billing_kernel.domain.dtos import CycleStatusInfo
from billing_kernel.domain.money import NumberLike, from_major
from billing_kernel.exceptions import EmployeeNotFoundError
from billing_kernel.logging_config import get_logger
from billing_kernel.models.party import Employee
from billing_kernel.selectors.ledger_selector import LedgerSelector
from billing_kernel.services.base import BaseService

logger = get_logger("services.employee_cycle")


class EmployeeCycleService(BaseService[Employee]):
    """
    Service answering "how much salary is still due this cycle?".

    Guarantees:
        - ``cycle_status`` is a pure function of the stored employee, the
          stored ledger entries and ``now``.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        cycle_length_days: int = DEFAULT_CYCLE_LENGTH_DAYS,
    ):
        super().__init__(session, clock)
        self._cycle_length_days = cycle_length_days

    def compute_cycle(self, employee: Employee, as_of: date | datetime) -> ObligationCycle:
        """Obligation cycle for ``employee`` containing ``as_of``."""
        window = current_cycle_window(employee.joining_date, as_of, self._cycle_length_days)
        payments = LedgerSelector(self.session).employee_debits(
            employee.id, start=window.start, end=window.end
        )
        return compute_obligation_cycle(
            employee.joining_date,
            employee.monthly_salary,
            payments,
            as_of,
            cycle_length_days=self._cycle_length_days,
        )

    @staticmethod
    def _to_info(employee_id: UUID, cycle: ObligationCycle) -> CycleStatusInfo:
        return CycleStatusInfo(
            employee_id=employee_id,
            status=cycle.status,
            cycle_paid_amount=cycle.paid_in_cycle,
            cycle_due_amount=cycle.due_in_cycle,
            next_due_date=cycle.next_due_date,
            current_cycle_start=cycle.cycle_start,
        )

    def cycle_status(
        self,
        employee_id: UUID,
        now: date | datetime | None = None,
    ) -> CycleStatusInfo:
        """
        Salary status of one employee in the cycle containing ``now``.

        Raises:
            EmployeeNotFoundError: If no employee has this id.
        """
        employee = self._require(Employee, employee_id, EmployeeNotFoundError)
        cycle = self.compute_cycle(employee, now or self._clock.today())
        return self._to_info(employee.id, cycle)

    def list_cycle_statuses(
        self,
        now: date | datetime | None = None,
        active_only: bool = True,
    ) -> list[CycleStatusInfo]:
        """Cycle status for every (active) employee, ordered by name."""
        as_of = now or self._clock.today()
        stmt = select(Employee)
        if active_only:
            stmt = stmt.where(Employee.is_active.is_(True))
        stmt = stmt.order_by(Employee.name)

        return [
            self._to_info(employee.id, self.compute_cycle(employee, as_of))
            for employee in self.session.scalars(stmt)
        ]

    def create_employee(
        self,
        name: str,
        joining_date: date,
        monthly_salary: NumberLike,
        actor_id: UUID,
        mobile: str | None = None,
    ) -> UUID:
        """Register an employee. ``monthly_salary`` is in major units."""
        employee = Employee(
            name=name,
            mobile=mobile,
            joining_date=joining_date,
            monthly_salary=from_major(monthly_salary, field="monthly_salary"),
            created_by_id=actor_id,
        )
        self.session.add(employee)
        self.session.flush()
        logger.info(
            "employee_created",
            extra={"employee_id": str(employee.id), "monthly_salary": employee.monthly_salary},
        )
        return employee.id
