"""
Test configuration and fixtures for the test suite
"""
import json
from pathlib import Path

import pytest

from packages.apm_tools.store import RecordStore


@pytest.fixture
def payroll_records():
    """Three-row collection from the search examples"""
    return [
        {"apm_application_code": "A1", "application_name": "Payroll System"},
        {"apm_application_code": "A2", "application_name": "Payroll Archive"},
        {"apm_application_code": "A3", "application_name": "Benefits Portal"},
    ]


@pytest.fixture
def sample_applications():
    """Full-shape application rows as produced by the converters"""
    return [
        {
            "apm_application_code": "APM1001",
            "application_name": "Payroll System",
            "application_description": "Processes salaries and tax withholding for employees",
            "application_lifecycle": "Production",
            "critical_information_asset": "Yes",
            "application_security_release_assessment_required": "Yes",
            "application_contact": "Dana Whitfield",
            "application_contact_email": "dana.whitfield@example.com",
            "application_contact_title": "Product Owner",
            "it_manager": "Sam Ortega",
            "itmanageremail": "sam.ortega@example.com",
            "it_manager_title": "IT Manager",
            "it_vp": "Lee Chang",
            "itvpemail": "lee.chang@example.com",
            "it_vp_title": "VP Finance Systems",
            "user_interface": "Internally Facing",
            "isusapp": "Y",
        },
        {
            "apm_application_code": "APM1002",
            "application_name": "Customer Portal",
            "application_description": "Self-service account management for customers",
            "application_lifecycle": "Production",
            "critical_information_asset": "Yes",
            "application_security_release_assessment_required": "Yes",
            "application_contact": "Riley Smith",
            "application_contact_email": "riley.smith@example.com",
            "application_contact_title": "Product Manager",
            "it_manager": "Sam Ortega",
            "itmanageremail": "sam.ortega@example.com",
            "it_manager_title": "IT Manager",
            "it_vp": "Morgan Smith",
            "itvpemail": "morgan.smith@example.com",
            "it_vp_title": "VP Digital",
            "user_interface": "Externally Facing",
            "isusapp": "Y",
        },
        {
            "apm_application_code": "APM1003",
            "application_name": "Timesheet Tracker",
            "application_description": "Collects weekly hours that feed payroll runs",
            "application_lifecycle": "Development",
            "critical_information_asset": "No",
            "application_security_release_assessment_required": "No",
            "application_contact": "Jordan Smith",
            "application_contact_email": "jordan.smith@example.com",
            "application_contact_title": "Analyst",
            "it_manager": "Pat Kim",
            "itmanageremail": "pat.kim@example.com",
            "it_manager_title": "IT Manager",
            "it_vp": "Lee Chang",
            "itvpemail": "lee.chang@example.com",
            "it_vp_title": "VP Finance Systems",
            "user_interface": "Internally Facing",
            "isusapp": "N",
        },
        {
            "apm_application_code": "APM1004",
            "application_name": "Badge Printer",
            "application_description": "Prints visitor badges at reception",
            "application_lifecycle": "Testing",
            "critical_information_asset": "No",
            "application_security_release_assessment_required": "Yes",
            "application_contact": "Casey Brown",
            "application_contact_email": "casey.brown@example.com",
            "application_contact_title": "Facilities Lead",
            "it_manager": "Pat Kim",
            "itmanageremail": "pat.kim@example.com",
            "it_manager_title": "IT Manager",
            "it_vp": "Morgan Smith",
            "itvpemail": "morgan.smith@example.com",
            "it_vp_title": "VP Digital",
            "user_interface": "Internally Facing",
            "isusapp": "N",
        },
    ]


@pytest.fixture
def payroll_store(payroll_records):
    store = RecordStore()
    store.load(payroll_records)
    return store


@pytest.fixture
def sample_store(sample_applications):
    store = RecordStore()
    store.load(sample_applications)
    return store


@pytest.fixture
def data_file(tmp_path: Path, sample_applications) -> Path:
    path = tmp_path / "applications.json"
    path.write_text(json.dumps(sample_applications, indent=2), encoding="utf-8")
    return path
