"""Tests for field flattening, promoted lookup, and embedded pointer initialization."""

from dataclasses import dataclass

from structcopy import ALL_NIL_FIELDS, embedded
from structcopy.core.fields import discover_fields, ensure_reachable, find_field


@dataclass
class Base:
    id: int = 0
    created: str = ""


@dataclass
class Person:
    name: str = ""


@dataclass
class Contact:
    email: str = ""


@dataclass
class Employee:
    base: Base = embedded(default_factory=Base)
    person: Person | None = embedded(default=None)
    title: str = ""


@dataclass
class Profile:
    contact: Contact | None = embedded(default=None)
    bio: str = ""


@dataclass
class Manager:
    employee: Employee | None = embedded(default=None)
    profile: Profile | None = embedded(default=None)
    reports: int = 0


@dataclass
class Inner:
    label: str = "inner"


@dataclass
class Outer:
    inner: Inner = embedded(default_factory=Inner)
    label: str = "outer"


@dataclass
class Left:
    label: str = "left"


@dataclass
class Right:
    label: str = "right"


@dataclass
class Both:
    left: Left = embedded(default_factory=Left)
    right: Right = embedded(default_factory=Right)


@dataclass(frozen=True)
class Point:
    x: int = 0


def names(fields):
    return [f.name for f in fields]


# discover_fields tests


def test_discover_flattens_embedded_fields():
    """Embedded fields disappear; their own fields take their place, in order."""
    need: set[str] = set()
    fields = discover_fields(Employee(person=Person("ann")), "", need)

    assert names(fields) == ["id", "created", "name", "title"]
    # Only pointer embeddings need initializing on the other side
    assert need == {"person"}


def test_discover_skips_null_embedded_pointer():
    need: set[str] = set()
    fields = discover_fields(Employee(), "", need)

    assert names(fields) == ["id", "created", "title"]
    assert need == set()


def test_discover_records_nested_paths():
    manager = Manager(
        employee=Employee(person=Person("x")),
        profile=Profile(contact=Contact("e@x")),
    )
    need: set[str] = set()
    fields = discover_fields(manager, "", need)

    assert names(fields) == ["id", "created", "name", "title", "email", "bio", "reports"]
    assert need == {"employee", "employee.person", "profile", "profile.contact"}


def test_discover_without_need_set():
    assert names(discover_fields(Employee(person=Person("ann")))) == [
        "id",
        "created",
        "name",
        "title",
    ]


def test_discover_non_record_is_empty():
    assert discover_fields(5) == []
    assert discover_fields(None) == []


def test_discover_keeps_duplicate_names():
    assert names(discover_fields(Both())) == ["label", "label"]


# ensure_reachable tests


def test_ensure_reachable_allocates_needed_pointer():
    employee = Employee()
    ensure_reachable(employee, "", {"person"})

    assert employee.person == Person()
    assert employee.base == Base()


def test_ensure_reachable_without_need_set_is_noop():
    employee = Employee()
    ensure_reachable(employee, "", None)
    assert employee.person is None


def test_ensure_reachable_nested_paths():
    manager = Manager()
    ensure_reachable(manager, "", {"employee", "employee.person"})

    assert manager.employee is not None
    assert manager.employee.person == Person()
    assert manager.profile is None


def test_ensure_reachable_only_listed_paths():
    manager = Manager()
    ensure_reachable(manager, "", {"profile"})

    assert manager.profile is not None
    assert manager.profile.contact is None
    assert manager.employee is None


def test_ensure_reachable_all_nil_fields():
    manager = Manager()
    ensure_reachable(manager, "", ALL_NIL_FIELDS)

    assert manager.employee is not None
    assert manager.employee.person is not None
    assert manager.profile is not None
    assert manager.profile.contact is not None


def test_empty_set_is_not_all_nil_fields():
    """ALL_NIL_FIELDS is compared by identity, an empty set initializes nothing."""
    manager = Manager()
    ensure_reachable(manager, "", frozenset())
    assert manager.employee is None


def test_ensure_reachable_keeps_existing_values():
    person = Person("kept")
    employee = Employee(person=person)
    ensure_reachable(employee, "", ALL_NIL_FIELDS)
    assert employee.person is person


# find_field tests


def test_find_direct_field():
    employee = Employee(person=Person("ann"), title="dev")
    handle = find_field(employee, "title")

    assert handle is not None
    assert handle.value == "dev"
    handle.set("lead")
    assert employee.title == "lead"


def test_find_promoted_field():
    employee = Employee(person=Person("ann"))
    handle = find_field(employee, "name")

    assert handle is not None
    assert handle.value == "ann"
    handle.set("bob")
    assert employee.person == Person("bob")


def test_find_field_does_not_cross_null_embedding():
    assert find_field(Employee(), "name") is None


def test_find_field_missing():
    assert find_field(Employee(), "salary") is None
    assert find_field(42, "real") is None


def test_shallowest_field_wins():
    handle = find_field(Outer(), "label")
    assert handle is not None
    assert handle.value == "outer"


def test_last_declared_wins_at_same_depth():
    handle = find_field(Both(), "label")
    assert handle is not None
    assert handle.value == "right"


def test_find_embedded_field_itself():
    employee = Employee(person=Person("ann"))
    handle = find_field(employee, "person")
    assert handle is not None
    assert handle.value is employee.person


def test_frozen_field_handle_not_settable():
    handle = find_field(Point(), "x")
    assert handle is not None
    assert not handle.settable
