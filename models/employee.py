"""Employee model.

An employee exclusively owns the tasks assigned to it: deleting the employee,
or removing a task from its collection, deletes those tasks. Both operations
live in EmployeeRepository so they run inside the caller's transaction.

The tasks collection cascades deletes without delete-orphan, since a task may
exist unassigned. Tasks not loaded into the session are left to the
ON DELETE CASCADE on tasks.assigned_to.
"""

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from models.base import Base


class Employee(Base):
    """Employee model mapping to the employees table."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    position = Column(String(100))
    department = Column(String(100))
    hire_date = Column(Date)
    salary = Column(Numeric(12, 2))
    address = Column(Text)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )

    tasks = relationship(
        "Task",
        back_populates="assigned_to",
        order_by="Task.id",
        cascade="all",
        passive_deletes=True,
    )
    user = relationship("User", back_populates="employee")

    def __repr__(self) -> str:
        return f"<Employee id={self.id} email={self.email!r}>"
