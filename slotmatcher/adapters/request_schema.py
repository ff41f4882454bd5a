"""
Request boundary: validates raw JSON payloads and converts them to domain objects.

Employees arrive in one of three shapes (a list, a single object, or an
object wrapping a list under ``"array"``). They are classified and normalised
here so the domain only ever sees a list of AvailabilityRecord.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..domain.exceptions import InvalidRequestError
from ..domain.models import AvailabilityRecord, EmployeeIdentity, TargetSelector, TimeOfDay

WRAPPED_EMPLOYEES_KEY = "array"


class EmployeeCollectionShape(str, Enum):
    """Accepted shapes of the ``employees`` field."""
    LIST = "list"
    WRAPPED = "wrapped"
    SINGLE = "single"


def classify_employees(employees: Any) -> EmployeeCollectionShape:
    """
    Determine which shape the ``employees`` field has.

    Raises:
        InvalidRequestError: If it is neither a list nor an object
    """
    if isinstance(employees, list):
        return EmployeeCollectionShape.LIST

    if isinstance(employees, dict):
        if isinstance(employees.get(WRAPPED_EMPLOYEES_KEY), list):
            return EmployeeCollectionShape.WRAPPED
        return EmployeeCollectionShape.SINGLE

    raise InvalidRequestError("employees must be an object or array")


def normalize_employees(employees: Any) -> List[Any]:
    """Flatten any accepted ``employees`` shape into a plain list."""
    shape = classify_employees(employees)

    if shape is EmployeeCollectionShape.LIST:
        return list(employees)
    if shape is EmployeeCollectionShape.WRAPPED:
        return list(employees[WRAPPED_EMPLOYEES_KEY])
    return [employees]


def _is_missing(value: Any) -> bool:
    """Absent, null or empty scalar. Empty lists and objects count as present."""
    if value is None:
        return True
    if isinstance(value, (list, dict)):
        return False
    return not value


class EmployeeData(BaseModel):
    """The ``data`` envelope of an upstream availability response."""
    model_config = ConfigDict(extra="ignore")

    result: Optional[Dict[str, Optional[List[str]]]] = None

    @field_validator("result")
    @classmethod
    def validate_slots(
        cls,
        value: Optional[Dict[str, Optional[List[str]]]]
    ) -> Optional[Dict[str, Optional[List[str]]]]:
        """Every slot must be a valid HH:MM:SS time of day."""
        for slots in (value or {}).values():
            for slot in slots or []:
                TimeOfDay.parse(slot)
        return value


class EmployeePayload(BaseModel):
    """A single employee entry of the request."""
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: Any = None
    email: Any = None
    phone: Any = None
    description: Any = None
    data: Optional[EmployeeData] = None

    def to_record(self) -> AvailabilityRecord:
        """Convert to the domain availability record."""
        result = self.data.result if self.data is not None else None

        return AvailabilityRecord(
            identity=EmployeeIdentity(
                id=self.id,
                name=self.name,
                email=self.email,
                phone=self.phone,
                description=self.description,
            ),
            slots_by_date={
                date_key: tuple(slots or ())
                for date_key, slots in (result or {}).items()
            },
        )


class TargetEmployeePayload(BaseModel):
    """Selector for the optional target employee."""
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    name: Any = None

    def to_selector(self) -> TargetSelector:
        return TargetSelector(id=self.id, name=self.name)


class MatchRequest(BaseModel):
    """Validated match request."""
    client_booking_time: str
    employees: List[EmployeePayload]
    target_employee: Optional[TargetEmployeePayload] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "MatchRequest":
        """
        Validate a decoded JSON body.

        Args:
            payload: The decoded request body

        Returns:
            MatchRequest with employees normalised to a list

        Raises:
            InvalidRequestError: If required fields are missing or malformed
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        if _is_missing(payload.get("client_booking_time")):
            raise InvalidRequestError("client_booking_time is required")

        employees = payload.get("employees")
        if _is_missing(employees):
            raise InvalidRequestError("employees is required")

        target = payload.get("target_employee")
        if _is_missing(target):
            target = None
        elif not isinstance(target, dict):
            raise InvalidRequestError("target_employee must be an object")

        try:
            return cls.model_validate({
                "client_booking_time": payload["client_booking_time"],
                "employees": normalize_employees(employees),
                "target_employee": target,
            })
        except ValidationError as exc:
            raise InvalidRequestError("Invalid request", str(exc)) from exc

    def records(self) -> List[AvailabilityRecord]:
        return [employee.to_record() for employee in self.employees]

    def selector(self) -> TargetSelector | None:
        if self.target_employee is None:
            return None
        return self.target_employee.to_selector()
