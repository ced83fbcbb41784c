from employee_db.dal.store import EmployeeStore

__all__ = ["EmployeeStore"]
