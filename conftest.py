"""
Shared pytest fixtures for the Offboarding Engine tests.
"""

from datetime import date

import pytest

from offboarding_engine import OffboardingWorkflow

FIXED_TODAY = date(2025, 3, 15)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed 'today'."""
    return lambda: FIXED_TODAY


@pytest.fixture
def workflow(fixed_clock):
    """Fresh workflow in the data entry stage."""
    return OffboardingWorkflow(clock=fixed_clock)


@pytest.fixture
def valid_fields():
    """Resignation details that pass validation."""
    return {
        "name": "Ali",
        "job_title": "Engineer",
        "start_date": date(2019, 3, 1),
        "resignation_date": date(2024, 6, 1),
        "reason": "Relocating",
    }


@pytest.fixture
def clearance_workflow(workflow, valid_fields):
    """Workflow that has moved on to the clearance stage."""
    assert workflow.submit_data_entry(valid_fields) == {}
    return workflow


@pytest.fixture
def sign_off_all():
    """Helper that completes and signs every clearance item of a workflow."""
    def _sign_off(wf, signature="Department Head"):
        for item in wf.clearance_items():
            wf.toggle_clearance_item(item.id, True)
            wf.set_clearance_signature(item.id, signature)
    return _sign_off
