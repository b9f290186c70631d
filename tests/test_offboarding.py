"""
Tests for the Offboarding Workflow.

This module covers stage transitions, validation, the clearance
checklist gate, restart and the entitlement calculation.
"""

from datetime import date
from unittest.mock import Mock, patch

import pytest
from pydantic import ValidationError

from offboarding_engine import OffboardingWorkflow, WorkflowStage
from offboarding_engine.models import EntitlementResult


class TestDataEntry:
    """Test cases for the data entry stage."""

    def test_workflow_initialization(self, workflow):
        """Test that a workflow starts empty in data entry."""
        assert workflow.workflow_id
        assert workflow.stage == WorkflowStage.DATA_ENTRY
        assert workflow.employee.name == ""
        assert workflow.employee.resignation_date is None
        assert workflow.errors == {}
        assert workflow.history == []
        assert len(workflow.clearance_items()) == 5

    def test_workflow_id_uniqueness(self):
        """Test that workflow ids are unique."""
        assert OffboardingWorkflow().workflow_id != OffboardingWorkflow().workflow_id

    def test_submit_without_start_date(self, workflow):
        """Test that the start date is not required to reach clearance."""
        errors = workflow.submit_data_entry({
            "name": "Ali",
            "job_title": "Engineer",
            "resignation_date": date(2024, 6, 1),
        })

        assert errors == {}
        assert workflow.stage == WorkflowStage.CLEARANCE
        assert workflow.employee.start_date is None
        items = workflow.clearance_items()
        assert len(items) == 5
        assert all(not item.completed and item.signature == "" for item in items)

    def test_submit_records_transition(self, clearance_workflow):
        """Test that the transition is recorded in the history."""
        assert len(clearance_workflow.history) == 1
        transition = clearance_workflow.history[0]
        assert transition.from_stage == WorkflowStage.DATA_ENTRY
        assert transition.to_stage == WorkflowStage.CLEARANCE
        assert transition.action == "submit_data_entry"

    def test_submit_records_clearance_request_date(self, clearance_workflow):
        """Test that the clearance request date comes from the clock."""
        assert clearance_workflow.clearance_requested_on == date(2025, 3, 15)

    def test_submit_all_fields_missing(self, workflow):
        """Test that every required field is reported."""
        errors = workflow.submit_data_entry({})

        assert errors == {
            "name": "Name is required",
            "job_title": "Job title is required",
            "resignation_date": "Resignation date is required",
        }
        assert workflow.stage == WorkflowStage.DATA_ENTRY
        assert workflow.errors == errors

    @pytest.mark.parametrize("field_name,blank", [
        ("name", "   "),
        ("job_title", "\t\n"),
    ])
    def test_whitespace_only_is_blank(self, workflow, valid_fields, field_name, blank):
        """Test that names made of whitespace are rejected."""
        valid_fields[field_name] = blank
        errors = workflow.submit_data_entry(valid_fields)

        assert list(errors) == [field_name]
        assert workflow.stage == WorkflowStage.DATA_ENTRY

    @pytest.mark.parametrize("field_name,message", [
        ("name", "Name is required"),
        ("job_title", "Job title is required"),
    ])
    def test_none_is_a_field_error(self, workflow, valid_fields, field_name, message):
        """Test that a None name or job title is reported, not raised."""
        valid_fields[field_name] = None
        errors = workflow.submit_data_entry(valid_fields)

        assert errors == {field_name: message}
        assert workflow.stage == WorkflowStage.DATA_ENTRY

    def test_none_reason_is_blank(self, workflow, valid_fields):
        """Test that a None reason is stored as an empty string."""
        valid_fields["reason"] = None

        assert workflow.submit_data_entry(valid_fields) == {}
        assert workflow.employee.reason == ""

    def test_update_field_accepts_none(self, workflow):
        """Test that clearing a text field with None blanks it."""
        workflow.update_field("name", "Ali")
        assert workflow.update_field("name", None) is True
        assert workflow.employee.name == ""
        assert workflow.submit_data_entry()["name"] == "Name is required"

    def test_failed_submit_stores_nothing(self, workflow, valid_fields):
        """Test that a rejected submission leaves the record untouched."""
        valid_fields["resignation_date"] = None
        workflow.submit_data_entry(valid_fields)

        assert workflow.employee.name == ""
        assert workflow.history == []

    def test_submit_merges_updated_fields(self, workflow):
        """Test that fields set one at a time are used on submission."""
        workflow.update_field("name", "Sara")
        workflow.update_field("job_title", "Analyst")
        workflow.update_field("resignation_date", date(2024, 12, 31))

        assert workflow.submit_data_entry() == {}
        assert workflow.employee.name == "Sara"

    def test_submit_unknown_field(self, workflow, valid_fields):
        """Test that unknown field names are a programming error."""
        valid_fields["salary"] = 1000
        with pytest.raises(ValueError, match="salary"):
            workflow.submit_data_entry(valid_fields)

    def test_submit_outside_data_entry(self, clearance_workflow, valid_fields):
        """Test that data entry cannot be resubmitted from clearance."""
        errors = clearance_workflow.submit_data_entry(valid_fields)

        assert "stage" in errors
        assert clearance_workflow.stage == WorkflowStage.CLEARANCE
        assert len(clearance_workflow.history) == 1

    def test_update_field_clears_its_error(self, workflow):
        """Test that editing a field clears only that field's error."""
        workflow.submit_data_entry({})
        workflow.update_field("name", "Ali")

        assert "name" not in workflow.errors
        assert "job_title" in workflow.errors
        assert "resignation_date" in workflow.errors

    def test_update_field_clears_error_without_validating(self, workflow):
        """Test that the error is cleared even for a still-blank value."""
        workflow.submit_data_entry({})
        workflow.update_field("name", "   ")

        assert "name" not in workflow.errors

    def test_update_field_parses_dates(self, workflow):
        """Test that ISO date strings are accepted."""
        workflow.update_field("resignation_date", "2024-06-01")
        assert workflow.employee.resignation_date == date(2024, 6, 1)

    def test_update_field_invalid_date(self, workflow):
        """Test that unparseable dates are rejected."""
        with pytest.raises(ValidationError):
            workflow.update_field("start_date", "not a date")

    def test_update_unknown_field(self, workflow):
        """Test that unknown field names are rejected."""
        with pytest.raises(ValueError, match="Unknown employee record field"):
            workflow.update_field("department", "Finance")

    def test_employee_is_a_snapshot(self, clearance_workflow):
        """Test that the employee snapshot cannot change the record."""
        snapshot = clearance_workflow.employee
        snapshot.name = "Someone Else"
        assert clearance_workflow.employee.name == "Ali"


class TestClearance:
    """Test cases for the clearance stage."""

    def test_checklist_locked_before_clearance(self, workflow):
        """Test that the checklist cannot be edited during data entry."""
        assert workflow.toggle_clearance_item("it-equipment", True) is False
        assert workflow.set_clearance_signature("it-equipment", "IT") is False
        assert workflow.set_clearance_comments("it-equipment", "note") is False
        assert workflow.clearance_items()[0].completed is False

    def test_toggle_and_sign(self, clearance_workflow):
        """Test updating a single item by id."""
        assert clearance_workflow.toggle_clearance_item("access-cards", True) is True
        assert clearance_workflow.set_clearance_signature("access-cards", "Security Lead") is True

        items = {item.id: item for item in clearance_workflow.clearance_items()}
        assert items["access-cards"].completed is True
        assert items["access-cards"].signature == "Security Lead"
        assert items["it-equipment"].completed is False

    def test_unknown_item(self, clearance_workflow):
        """Test that unknown ids are a no-op."""
        before = clearance_workflow.clearance_items()

        assert clearance_workflow.toggle_clearance_item("badge", True) is False
        assert clearance_workflow.set_clearance_signature("badge", "X") is False
        assert clearance_workflow.clearance_items() == before

    def test_complete_clearance_incomplete(self, clearance_workflow):
        """Test that an incomplete checklist cannot be completed."""
        for item in clearance_workflow.clearance_items()[:4]:
            clearance_workflow.toggle_clearance_item(item.id, True)
            clearance_workflow.set_clearance_signature(item.id, "Signed")

        assert clearance_workflow.is_clearance_complete() is False
        assert clearance_workflow.complete_clearance() is False
        assert clearance_workflow.stage == WorkflowStage.CLEARANCE

    def test_complete_clearance_unsigned(self, clearance_workflow):
        """Test that a completed but unsigned item blocks completion."""
        for item in clearance_workflow.clearance_items():
            clearance_workflow.toggle_clearance_item(item.id, True)

        assert clearance_workflow.complete_clearance() is False
        assert clearance_workflow.stage == WorkflowStage.CLEARANCE

    def test_complete_clearance(self, clearance_workflow, sign_off_all):
        """Test completing a fully signed checklist."""
        sign_off_all(clearance_workflow)

        assert clearance_workflow.is_clearance_complete() is True
        assert clearance_workflow.complete_clearance() is True
        assert clearance_workflow.stage == WorkflowStage.COMPLETED
        assert clearance_workflow.history[-1].action == "complete_clearance"

    def test_completed_is_frozen(self, clearance_workflow, sign_off_all):
        """Test that nothing can be changed once completed."""
        sign_off_all(clearance_workflow)
        clearance_workflow.complete_clearance()

        assert clearance_workflow.toggle_clearance_item("property", False) is False
        assert clearance_workflow.set_clearance_signature("property", "") is False
        assert clearance_workflow.update_field("name", "Changed") is False
        assert clearance_workflow.complete_clearance() is False
        assert clearance_workflow.return_to_data_entry() is False

        assert clearance_workflow.is_clearance_complete() is True
        assert clearance_workflow.employee.name == "Ali"
        assert clearance_workflow.stage == WorkflowStage.COMPLETED

    def test_complete_clearance_from_data_entry(self, workflow):
        """Test that completion is rejected before clearance."""
        assert workflow.complete_clearance() is False
        assert workflow.stage == WorkflowStage.DATA_ENTRY

    def test_return_to_data_entry_keeps_progress(self, clearance_workflow):
        """Test that going back keeps the record and checklist progress."""
        clearance_workflow.toggle_clearance_item("it-equipment", True)
        clearance_workflow.set_clearance_signature("it-equipment", "IT")

        assert clearance_workflow.return_to_data_entry() is True
        assert clearance_workflow.stage == WorkflowStage.DATA_ENTRY
        assert clearance_workflow.employee.name == "Ali"

        clearance_workflow.update_field("job_title", "Senior Engineer")
        assert clearance_workflow.submit_data_entry() == {}

        item = clearance_workflow.clearance_items()[0]
        assert item.completed is True
        assert item.signature == "IT"
        assert clearance_workflow.employee.job_title == "Senior Engineer"
        assert clearance_workflow.clearance_requested_on == date(2025, 3, 15)

    def test_return_to_data_entry_only_from_clearance(self, workflow):
        """Test that going back is rejected outside clearance."""
        assert workflow.return_to_data_entry() is False
        assert workflow.history == []


class TestRestart:
    """Test cases for restart."""

    @pytest.mark.parametrize("stage", list(WorkflowStage))
    def test_restart_from_any_stage(self, workflow, valid_fields, sign_off_all, stage):
        """Test that restart discards everything from every stage."""
        if stage != WorkflowStage.DATA_ENTRY:
            workflow.submit_data_entry(valid_fields)
            workflow.toggle_clearance_item("it-equipment", True)
            workflow.set_clearance_signature("it-equipment", "IT")
        if stage == WorkflowStage.COMPLETED:
            sign_off_all(workflow)
            workflow.complete_clearance()
        else:
            workflow.update_field("reason", "Leaving")
        workflow.set_financial_inputs(salary=5000)
        assert workflow.stage == stage

        workflow_id = workflow.workflow_id
        workflow.restart()

        assert workflow.stage == WorkflowStage.DATA_ENTRY
        assert workflow.workflow_id == workflow_id
        employee = workflow.employee
        assert (employee.name, employee.job_title, employee.reason) == ("", "", "")
        assert employee.start_date is None
        assert employee.resignation_date is None
        assert workflow.errors == {}
        assert workflow.history == []
        assert workflow.clearance_requested_on is None
        assert workflow.financial_inputs is None

        items = workflow.clearance_items()
        assert len(items) == 5
        assert all(not item.completed and item.signature == "" for item in items)

    def test_restart_clears_errors(self, workflow):
        """Test that pending validation errors are dropped."""
        workflow.submit_data_entry({})
        workflow.restart()
        assert workflow.errors == {}


class TestDerivedValues:
    """Test cases for service duration and entitlements."""

    def test_service_duration_from_record(self, clearance_workflow):
        """Test the duration between record start and resignation dates."""
        duration = clearance_workflow.service_duration()
        assert duration.years == 5
        assert duration.months == 3
        assert duration.decimal_years == 5.25

    def test_service_duration_text(self, workflow):
        """Test that duration text appears once both dates are set."""
        assert workflow.service_duration_text() == ""

        workflow.update_field("start_date", date(2021, 1, 1))
        assert workflow.service_duration_text() == ""

        workflow.update_field("resignation_date", date(2024, 3, 1))
        assert workflow.service_duration_text() == "3 years 2 months 15 days"

    def test_recomputed_on_every_read(self, workflow):
        """Test that derived values follow field changes."""
        workflow.update_field("start_date", date(2020, 1, 1))
        workflow.update_field("resignation_date", date(2022, 1, 1))
        assert workflow.service_duration().years == 2

        workflow.update_field("resignation_date", date(2027, 1, 1))
        assert workflow.service_duration().years == 7

    def test_no_financial_inputs(self, clearance_workflow):
        """Test that entitlements are zero until inputs are given."""
        assert clearance_workflow.calculate_entitlements() == EntitlementResult()
        assert clearance_workflow.entitlement_service_duration().decimal_years == 0

    def test_entitlements_use_override_start_date(self, clearance_workflow):
        """Test that the calculation uses its own start date."""
        clearance_workflow.set_financial_inputs(salary=10000, vacation_days=0,
                                                start_date=date(2021, 6, 1))

        assert clearance_workflow.service_duration().decimal_years == 5.25
        assert clearance_workflow.entitlement_service_duration().years == 3
        assert clearance_workflow.calculate_entitlements().end_of_service_benefit == pytest.approx(15000)

    def test_default_financial_start_date(self, clearance_workflow):
        """Test the default start date of one year before today."""
        inputs = clearance_workflow.set_financial_inputs(salary=6000, vacation_days=15)

        assert inputs.start_date == date(2024, 3, 15)
        result = clearance_workflow.calculate_entitlements()
        assert result.end_of_service_benefit == 0
        assert result.vacation_compensation == pytest.approx(3000)

    def test_default_start_date_on_leap_day(self):
        """Test the default look-back from 29 February."""
        workflow = OffboardingWorkflow(clock=lambda: date(2024, 2, 29))
        assert workflow.default_financial_start_date() == date(2023, 2, 28)

    def test_configured_lookback(self, fixed_clock):
        """Test that the look-back period is configurable."""
        workflow = OffboardingWorkflow({"default_financial_lookback_years": 3}, clock=fixed_clock)
        assert workflow.default_financial_start_date() == date(2022, 3, 15)

    def test_negative_inputs_treated_as_zero(self, clearance_workflow):
        """Test that negative salary and days are treated as zero."""
        clearance_workflow.set_financial_inputs(salary=-1000, vacation_days=-3,
                                                start_date=date(2010, 1, 1))
        assert clearance_workflow.calculate_entitlements() == EntitlementResult()

    def test_entitlements_not_cached(self, clearance_workflow):
        """Test that every call recomputes from the current inputs."""
        with patch('offboarding_engine.workflows.offboarding.calculate_entitlements') as mock_calc:
            mock_calc.return_value = EntitlementResult(total=1.0)
            clearance_workflow.set_financial_inputs(salary=1000, start_date=date(2020, 1, 1))

            clearance_workflow.calculate_entitlements()
            clearance_workflow.calculate_entitlements()

        assert mock_calc.call_count == 2

    def test_clock_is_consulted(self, valid_fields):
        """Test that the injected clock provides the request date."""
        clock = Mock(return_value=date(2024, 5, 20))
        workflow = OffboardingWorkflow(clock=clock)
        workflow.submit_data_entry(valid_fields)

        clock.assert_called_once()
        assert workflow.clearance_requested_on == date(2024, 5, 20)


class TestSummary:
    """Test cases for the workflow summary."""

    def test_end_to_end(self, workflow, valid_fields, sign_off_all):
        """Test a full run from data entry to the final summary."""
        assert workflow.submit_data_entry(valid_fields) == {}
        sign_off_all(workflow, "Manager")
        assert workflow.complete_clearance() is True
        workflow.set_financial_inputs(salary=10000, vacation_days=15, start_date=date(2017, 6, 1))

        summary = workflow.summary()

        assert summary.workflow_id == workflow.workflow_id
        assert summary.stage == WorkflowStage.COMPLETED
        assert summary.employee.name == "Ali"
        assert summary.service_duration_text == "5 years 3 months 29 days"
        assert summary.clearance_complete is True
        assert all(item.signature == "Manager" for item in summary.clearance_items)
        assert summary.clearance_requested_on == date(2025, 3, 15)
        assert summary.entitlements.total == pytest.approx(75000)
        assert [t.to_stage for t in workflow.history] == [
            WorkflowStage.CLEARANCE,
            WorkflowStage.COMPLETED,
        ]

    def test_summary_without_financial_inputs(self, clearance_workflow):
        """Test that entitlements are left out until inputs are set."""
        summary = clearance_workflow.summary()

        assert summary.entitlements is None
        assert summary.clearance_complete is False
