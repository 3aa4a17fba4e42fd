"""End-to-end copy workflows across API models, domain records, and storage rows."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel

from structcopy import Copier, CopierSettings, Embedded, Ref, embedded


class Department(Enum):
    ENGINEERING = "engineering"
    SALES = "sales"


# API layer (Pydantic)


class AddressIn(BaseModel):
    street: str
    city: str


class ContactIn(BaseModel):
    email: str = ""
    phone: str | None = None


class HireRequest(BaseModel):
    contact: Annotated[ContactIn | None, Embedded()] = None
    name: str
    age: int
    department: Department = Department.ENGINEERING
    addresses: list[AddressIn] = []
    role: str = ""


# Domain layer (dataclasses)


@dataclass
class Audit:
    version: int = 0


@dataclass
class Contact:
    email: str = ""
    phone: str | None = None


@dataclass
class Address:
    street: str = ""
    city: str = ""
    primary: bool = False


@dataclass
class EmployeeRecord:
    audit: Audit = embedded(default_factory=Audit)
    contact: Contact | None = embedded(default=None)
    name: str = ""
    age: float = 0.0
    department: Department = Department.SALES
    addresses: list[Address] = field(default_factory=list)
    title: str = ""

    def set_role(self, role: str) -> None:
        self.title = role.title()

    def get_role(self) -> str:
        return self.title.lower()

    def display_name(self) -> str:
        return f"{self.name} <{self.email}>" if self.contact else self.name

    @property
    def email(self) -> str:
        return self.contact.email if self.contact else ""


# Storage layer


@dataclass
class NullText:
    text: str = ""
    valid: bool = False

    def __scan__(self, value: Any) -> None:
        if value is None:
            self.text, self.valid = "", False
        elif isinstance(value, str):
            self.text, self.valid = value, True
        else:
            raise TypeError(f"unsupported {type(value).__name__}")


@dataclass
class EmployeeRow:
    name: str = ""
    phone: NullText = field(default_factory=NullText)
    email: str = ""
    display_name: str = ""
    role: str = ""


@dataclass
class DirectoryEntry:
    name: str = ""
    city: str = ""


def hire_request() -> HireRequest:
    return HireRequest(
        contact=ContactIn(email="ann@example.com"),
        name="Ann",
        age=41,
        addresses=[AddressIn(street="1 Main", city="Springfield")],
        role="staff engineer",
    )


def test_request_to_record_to_row():
    copier = Copier(CopierSettings())

    record = EmployeeRecord()
    copier.copy(record, hire_request())

    assert record.contact == Contact(email="ann@example.com", phone=None)
    assert record.name == "Ann"
    assert record.age == 41.0
    assert record.department is Department.ENGINEERING
    assert record.addresses == [Address(street="1 Main", city="Springfield")]
    assert record.title == "Staff Engineer"
    assert record.audit == Audit()

    row = EmployeeRow()
    copier.copy(row, record)

    assert row.name == "Ann"
    assert row.phone == NullText("", False)
    assert row.email == "ann@example.com"
    assert row.display_name == "Ann <ann@example.com>"
    assert row.role == "staff engineer"


def test_record_without_contact():
    copier = Copier(CopierSettings())
    request = hire_request()
    request.contact = None

    record = EmployeeRecord()
    copier.copy(record, request)

    assert record.contact is None
    assert record.name == "Ann"

    row = EmployeeRow()
    copier.copy(row, record)
    assert row.email == ""
    assert row.display_name == "Ann"


def test_record_with_all_embedded_initialized():
    copier = Copier(CopierSettings(init_all_embedded=True))
    request = hire_request()
    request.contact = None

    record = EmployeeRecord()
    copier.copy(record, request)

    assert record.contact == Contact()


def test_directory_listing_from_records():
    copier = Copier(CopierSettings())
    records = []
    for name, city in [("Ann", "Springfield"), ("Bob", "Shelbyville")]:
        record = EmployeeRecord(name=name, addresses=[Address(city=city)])
        records.append(record)

    entries = Ref(list[DirectoryEntry])
    copier.copy(entries, records)

    assert [entry.name for entry in entries.value] == ["Ann", "Bob"]
    # city lives in a list, not an embedded record, so it is not promoted
    assert all(entry.city == "" for entry in entries.value)

    copier.copy(entries, EmployeeRecord(name="Eve"))
    assert [entry.name for entry in entries.value] == ["Ann", "Bob", "Eve"]
