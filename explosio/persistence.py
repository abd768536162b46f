"""
Explosio - Project persistence
==============================

Pydantic records mirroring the activity tree, for saving a project as
plain data (JSON, YAML, a document store) and loading it back.

    ProjectRecord
      ├── suppliers: [SupplierRecord]        stored once, keyed by name
      └── root: ActivityRecord
            ├── humans / materials / assets  (supplier_ref → supplier name)
            └── sub_activities: [ActivityRecord, ...]

CPM fields are derived data and are not stored; run `compute_cpm`
after loading. On load every supplier name maps to a single Supplier
instance, so two distinct suppliers sharing a name collapse into one.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from explosio.domain.activity import Activity
from explosio.domain.builder import Project
from explosio.domain.periods import period_label
from explosio.domain.resources import (
    Asset,
    HumanResource,
    MaterialResource,
    Resource,
    Supplier,
)
from explosio.errors import InvalidSupplierError
from explosio.tree import iter_resources


# ═══════════════════════════════════════════════════════════════════════════════
# RECORDS
# ═══════════════════════════════════════════════════════════════════════════════

class SupplierRecord(BaseModel):
    """Supplier as stored in the project-level supplier list."""
    name: str
    description: str = ""
    unit_cost: float = 0.0
    available_quantity: float = 0.0
    period: str = Field(default="day", description="minute, hour, day, week, month or year")


class HumanRecord(BaseModel):
    role: str
    description: str = ""
    cost_per_h: float = 0.0
    quantity: float = 0.0
    supplier_ref: Optional[str] = None


class MaterialRecord(BaseModel):
    name: str
    description: str = ""
    unit_cost: float = 0.0
    quantity: float = 0.0
    supplier_ref: Optional[str] = None


class AssetRecord(BaseModel):
    name: str
    description: str = ""
    cost_per_use: float = 0.0
    quantity: float = 0.0
    supplier_ref: Optional[str] = None


class ActivityRecord(BaseModel):
    """One tree node with its resources and children."""
    id: str
    name: str = ""
    description: str = ""
    duration: int = 0
    min_duration: int = 0
    crash_cost_step: float = 0.0
    humans: List[HumanRecord] = Field(default_factory=list)
    materials: List[MaterialRecord] = Field(default_factory=list)
    assets: List[AssetRecord] = Field(default_factory=list)
    sub_activities: List["ActivityRecord"] = Field(default_factory=list)


ActivityRecord.model_rebuild()


class ProjectRecord(BaseModel):
    """Root of a saved project."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Espresso",
                "suppliers": [
                    {"name": "Roaster", "available_quantity": 5000, "period": "day"},
                ],
                "root": {
                    "id": "ACT-001",
                    "name": "Serve",
                    "duration": 2,
                    "min_duration": 2,
                    "sub_activities": [
                        {
                            "id": "ACT-002",
                            "name": "Grind",
                            "duration": 1,
                            "materials": [
                                {"name": "Coffee", "unit_cost": 0.02, "quantity": 7, "supplier_ref": "Roaster"},
                            ],
                        },
                    ],
                },
            }
        }
    )

    name: str = ""
    root: Optional[ActivityRecord] = None
    suppliers: List[SupplierRecord] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════════
# MODEL → RECORD
# ═══════════════════════════════════════════════════════════════════════════════

def _supplier_ref(resource: Resource) -> Optional[str]:
    return resource.supplier.name if resource.supplier is not None else None


def _activity_to_record(activity: Activity) -> ActivityRecord:
    return ActivityRecord(
        id=activity.id,
        name=activity.name,
        description=activity.description,
        duration=activity.duration,
        min_duration=activity.min_duration,
        crash_cost_step=activity.crash_cost_step,
        humans=[
            HumanRecord(
                role=h.role,
                description=h.description,
                cost_per_h=h.cost_per_h,
                quantity=h.quantity,
                supplier_ref=_supplier_ref(h),
            )
            for h in activity.humans
        ],
        materials=[
            MaterialRecord(
                name=m.name,
                description=m.description,
                unit_cost=m.unit_cost,
                quantity=m.quantity,
                supplier_ref=_supplier_ref(m),
            )
            for m in activity.materials
        ],
        assets=[
            AssetRecord(
                name=a.name,
                description=a.description,
                cost_per_use=a.cost_per_use,
                quantity=a.quantity,
                supplier_ref=_supplier_ref(a),
            )
            for a in activity.assets
        ],
        sub_activities=[_activity_to_record(sub) for sub in activity.sub_activities],
    )


def project_to_record(project: Project) -> ProjectRecord:
    """Snapshot a project; suppliers are listed once each, first-seen order."""
    suppliers: Dict[str, SupplierRecord] = {}
    for _, resource in iter_resources(project.root):
        s = resource.supplier
        if s is None or s.name in suppliers:
            continue
        suppliers[s.name] = SupplierRecord(
            name=s.name,
            description=s.description,
            unit_cost=s.unit_cost,
            available_quantity=s.available_quantity,
            period=period_label(s.period),
        )

    return ProjectRecord(
        name=project.name,
        root=_activity_to_record(project.root) if project.root is not None else None,
        suppliers=list(suppliers.values()),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# RECORD → MODEL
# ═══════════════════════════════════════════════════════════════════════════════

class _SupplierRegistry:
    """Name → Supplier, one instance per name."""

    def __init__(self, records: List[SupplierRecord]):
        self._by_name: Dict[str, Supplier] = {}
        for r in records:
            self._by_name[r.name] = Supplier(
                name=r.name,
                description=r.description,
                unit_cost=r.unit_cost,
                available_quantity=r.available_quantity,
                period=r.period,
            )

    def resolve(self, ref: Optional[str], owner: str) -> Optional[Supplier]:
        if ref is None:
            return None
        try:
            return self._by_name[ref]
        except KeyError:
            raise InvalidSupplierError(f"{owner} references unknown supplier {ref}") from None


def _activity_from_record(record: ActivityRecord, registry: _SupplierRegistry) -> Activity:
    activity = Activity(
        id=record.id,
        name=record.name,
        description=record.description,
        duration=record.duration,
        min_duration=record.min_duration,
        crash_cost_step=record.crash_cost_step,
    )
    for h in record.humans:
        activity.humans.append(HumanResource(
            role=h.role,
            description=h.description,
            cost_per_h=h.cost_per_h,
            quantity=h.quantity,
            supplier=registry.resolve(h.supplier_ref, f"activity {record.id}"),
        ))
    for m in record.materials:
        activity.materials.append(MaterialResource(
            name=m.name,
            description=m.description,
            unit_cost=m.unit_cost,
            quantity=m.quantity,
            supplier=registry.resolve(m.supplier_ref, f"activity {record.id}"),
        ))
    for a in record.assets:
        activity.assets.append(Asset(
            name=a.name,
            description=a.description,
            cost_per_use=a.cost_per_use,
            quantity=a.quantity,
            supplier=registry.resolve(a.supplier_ref, f"activity {record.id}"),
        ))
    for sub in record.sub_activities:
        activity.add_sub_activity(_activity_from_record(sub, registry))
    return activity


def project_from_record(record: ProjectRecord) -> Project:
    """Rebuild a project; raises InvalidSupplierError on an unknown supplier_ref."""
    registry = _SupplierRegistry(record.suppliers)
    root = _activity_from_record(record.root, registry) if record.root is not None else None
    return Project(name=record.name, root=root)


def dump_project(project: Project) -> Dict[str, Any]:
    return project_to_record(project).model_dump()


def load_project(data: Dict[str, Any]) -> Project:
    """Validate `data` as a ProjectRecord (pydantic ValidationError if malformed) and rebuild it."""
    return project_from_record(ProjectRecord.model_validate(data))
