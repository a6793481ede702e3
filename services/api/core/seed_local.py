"""
Seed script for local testing of Pothole Pulse.
Loads the demo defects (lower Manhattan) and a few repair documents.

Usage:
    python -m core.seed_local
"""
import logging
import os
import sys
from typing import Any, Dict, List

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import (
    Classification,
    LidarData,
    Location,
    PointCloud,
    Pothole,
    Severity,
    Status,
    Surface,
)
from settings import get_settings

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/placeholder.svg"


def sample_potholes() -> List[Pothole]:
    """The demo dataset as domain records (accuracy as a fraction)."""
    return [
        Pothole(
            id="ph-001",
            pothole_number=1,
            road_id="NYC-5AVE",
            location=Location(lat=40.7128, lng=-74.0060, address="350 5th Ave, New York, NY 10118"),
            severity=Severity.HIGH,
            status=Status.REPORTED,
            detection_accuracy=0.92,
            report_date="2025-04-15T08:30:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Large pothole causing traffic slowdowns during rush hour",
        ),
        Pothole(
            id="ph-002",
            pothole_number=2,
            road_id="NYC-5AVE",
            location=Location(lat=40.7082, lng=-73.9982, address="175 5th Ave, New York, NY 10010"),
            severity=Severity.MEDIUM,
            status=Status.SCHEDULED,
            detection_accuracy=0.87,
            report_date="2025-04-12T14:15:00Z",
            scheduled_repair_date="2025-05-10T09:00:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Medium-sized pothole near pedestrian crossing",
        ),
        Pothole(
            id="ph-003",
            pothole_number=3,
            road_id="NYC-WATER",
            location=Location(lat=40.7112, lng=-74.0156, address="55 Water St, New York, NY 10041"),
            severity=Severity.CRITICAL,
            status=Status.IN_PROGRESS,
            detection_accuracy=0.95,
            report_date="2025-04-10T11:45:00Z",
            scheduled_repair_date="2025-05-01T08:00:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Deep pothole causing damage to multiple vehicles",
            lidar_data=LidarData(
                point_cloud=PointCloud(points=184320, density=412.5, accuracy=0.95),
                surface=Surface(depth=11.4, width=86.0, area=0.58),
                classification=Classification(
                    confidence=95.0, model="PotholeNet-v2", scan_date="2025-04-10T11:40:00Z"
                ),
            ),
        ),
        Pothole(
            id="ph-004",
            pothole_number=4,
            road_id="NYC-LEX",
            location=Location(lat=40.7234, lng=-73.9985, address="405 Lexington Ave, New York, NY 10174"),
            severity=Severity.LOW,
            status=Status.COMPLETED,
            detection_accuracy=0.81,
            report_date="2025-04-05T09:20:00Z",
            scheduled_repair_date="2025-04-25T10:00:00Z",
            completion_date="2025-04-27T14:30:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Small pothole repaired ahead of schedule",
        ),
        Pothole(
            id="ph-005",
            pothole_number=5,
            road_id="NYC-ROCK",
            location=Location(lat=40.7580, lng=-73.9855, address="45 Rockefeller Plaza, New York, NY 10111"),
            severity=Severity.HIGH,
            status=Status.INSPECTED,
            detection_accuracy=0.89,
            report_date="2025-04-18T13:10:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Pothole in high-traffic area causing congestion",
        ),
        Pothole(
            id="ph-006",
            pothole_number=6,
            road_id="NYC-PARK",
            location=Location(lat=40.7527, lng=-73.9772, address="230 Park Ave, New York, NY 10169"),
            severity=Severity.MEDIUM,
            status=Status.REPORTED,
            detection_accuracy=0.84,
            report_date="2025-04-20T16:05:00Z",
            images=[PLACEHOLDER_IMAGE],
            description="Pothole near bus stop affecting public transportation",
        ),
    ]


def sample_documents() -> List[Dict[str, Any]]:
    return [
        {
            "id": "doc-001",
            "title": "Work order: 55 Water St resurfacing",
            "type": "work_order",
            "status": "in-progress",
            "priority": "urgent",
            "due_date": "2025-05-01",
            "assigned_to": "Maintenance Crew",
            "pothole_id": "ph-003",
        },
        {
            "id": "doc-002",
            "title": "Inspection report: Rockefeller Plaza",
            "type": "inspection_report",
            "status": "completed",
            "priority": "high",
            "due_date": "2025-04-22",
            "assigned_to": "Road Inspector",
            "pothole_id": "ph-005",
        },
        {
            "id": "doc-003",
            "title": "Repair estimate: 175 5th Ave",
            "type": "repair_estimate",
            "status": "pending",
            "priority": "medium",
            "due_date": "2025-05-08",
            "assigned_to": "Admin User",
            "pothole_id": "ph-002",
        },
        {
            "id": "doc-004",
            "title": "Citizen complaint: 350 5th Ave",
            "type": "citizen_complaint",
            "status": "pending",
            "priority": "high",
            "due_date": "2025-04-18",
            "assigned_to": "Road Inspector",
            "pothole_id": "ph-001",
        },
        {
            "id": "doc-005",
            "title": "Q2 road works permit",
            "type": "permit",
            "status": "in-progress",
            "priority": "low",
            "due_date": "2025-06-30",
            "assigned_to": "Admin User",
            "pothole_id": None,
        },
    ]


def seed(adapter) -> Dict[str, int]:
    """
    Write the demo dataset through `adapter`.

    Returns:
        {"potholes": n, "documents": m}
    """
    potholes = sample_potholes()
    for p in potholes:
        adapter.create_pothole(p.to_storage())

    documents = sample_documents()
    for d in documents:
        adapter.create_document(d)

    logger.info(f"Seeded {len(potholes)} potholes and {len(documents)} documents")
    return {"potholes": len(potholes), "documents": len(documents)}


def seed_if_empty(adapter) -> bool:
    """Seed only when the store has no potholes yet. Returns True if seeded."""
    if adapter.list_potholes():
        logger.info("Store already has potholes; skipping demo seed")
        return False
    seed(adapter)
    return True


def main():
    """Create sample data for testing."""
    from adapters import build_storage_adapter

    print("🌱 Seeding Pothole Pulse...")

    settings = get_settings()
    print(f"📦 Using {settings.storage_backend} backend")

    adapter = build_storage_adapter(settings)
    if not seed_if_empty(adapter):
        print("ℹ️  Store is not empty, nothing to do")
        return

    print("\n" + "=" * 60)
    print("🎉 Seeding complete!")
    print("=" * 60)
    print(f"\n📋 Potholes:  {len(sample_potholes())}")
    print(f"📋 Documents: {len(sample_documents())}")
    print()


if __name__ == "__main__":
    main()
