"""
Offboarding Workflow for the Offboarding Engine.

Guides a resigning employee through data entry, the department clearance
checklist and completion, and exposes the end-of-service entitlements
computed from the captured record.
"""

import logging
import uuid
from datetime import date
from typing import Any, Callable, Dict, Optional

from ..engine.checklist import ClearanceChecklist
from ..engine.entitlements import calculate_entitlements, compute_service_duration
from ..models import (
    ClearanceItems,
    EmployeeRecord,
    EntitlementResult,
    FinancialInputs,
    OffboardingSummary,
    ServiceDuration,
    TransitionHistory,
    TransitionRecord,
    WorkflowStage,
)
from .helpers import describe_employee, format_service_duration, validate_resignation_fields

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "job_title", "start_date", "resignation_date", "reason")

WRONG_STAGE_MESSAGE = "Resignation details can only be submitted during data entry"


class OffboardingWorkflow:
    """
    State machine for a single employee's offboarding.

    Stages only advance DATA_ENTRY -> CLEARANCE -> COMPLETED through their
    validation gates. ``restart()`` returns to DATA_ENTRY from any stage and
    discards the record, checklist progress and financial inputs.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 clock: Optional[Callable[[], date]] = None):
        """
        Initialize the workflow.

        Args:
            config: Configuration dictionary (see ``offboarding_engine.config``)
            clock: Callable returning today's date, defaults to ``date.today``
        """
        self.config = config or {}
        self.clock = clock or date.today
        self.workflow_id = str(uuid.uuid4())
        self._reset_state()

        logger.info(f"Initialized {self.__class__.__name__} {self.workflow_id}")

    def _reset_state(self):
        self.stage = WorkflowStage.DATA_ENTRY
        self.record = EmployeeRecord()
        self.checklist = ClearanceChecklist()
        self.history: TransitionHistory = []
        self.clearance_requested_on: Optional[date] = None
        self.financial_inputs: Optional[FinancialInputs] = None
        self._errors: Dict[str, str] = {}

    def _transition(self, to_stage: WorkflowStage, action: str):
        record = TransitionRecord(from_stage=self.stage, to_stage=to_stage, action=action)
        self.history.append(record)
        logger.info(f"Workflow {self.workflow_id}: {self.stage.value} -> {to_stage.value} ({action})")
        self.stage = to_stage

    @property
    def errors(self) -> Dict[str, str]:
        """Field to message map from the last failed submission."""
        return dict(self._errors)

    @property
    def employee(self) -> EmployeeRecord:
        """Snapshot of the employee record."""
        return self.record.model_copy()

    def submit_data_entry(self, fields: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
        """
        Submit resignation details and move on to clearance.

        Values in ``fields`` are merged over the current record before
        validation. Nothing is stored unless validation passes.

        Args:
            fields: EmployeeRecord field values keyed by field name

        Returns:
            Dictionary of field name to error message (empty on success)
        """
        if self.stage != WorkflowStage.DATA_ENTRY:
            logger.warning(f"Rejected data entry submission in stage {self.stage.value}")
            return {"stage": WRONG_STAGE_MESSAGE}

        fields = fields or {}
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown employee record fields: {', '.join(sorted(unknown))}")

        candidate = EmployeeRecord.model_validate({**self.record.model_dump(), **fields})
        errors = validate_resignation_fields(candidate.model_dump())
        if errors:
            self._errors = errors
            logger.info(f"Data entry validation failed: {', '.join(sorted(errors))}")
            return dict(errors)

        self.record = candidate
        self._errors = {}
        if self.clearance_requested_on is None:
            self.clearance_requested_on = self.clock()
        self._transition(WorkflowStage.CLEARANCE, "submit_data_entry")
        logger.info(f"Opened clearance for {describe_employee(self.record)}")
        return {}

    def update_field(self, name: str, value: Any) -> bool:
        """
        Change a single employee record field.

        Any error previously reported for the field is cleared without
        re-running validation.

        Returns:
            True if the field was updated, False once the workflow is completed

        Raises:
            ValueError: If ``name`` is not an employee record field
        """
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown employee record field: {name}")

        if self.stage == WorkflowStage.COMPLETED:
            logger.warning(f"Rejected update of {name}: workflow is completed")
            return False

        self.record = EmployeeRecord.model_validate({**self.record.model_dump(), name: value})
        self._errors.pop(name, None)
        logger.debug(f"Updated field {name}")
        return True

    def _checklist_editable(self, action: str, item_id: str) -> bool:
        if self.stage != WorkflowStage.CLEARANCE:
            logger.warning(f"Rejected {action} of {item_id} in stage {self.stage.value}")
            return False
        return True

    def toggle_clearance_item(self, item_id: str, completed: bool) -> bool:
        """Mark a clearance item completed or not. False if rejected or unknown."""
        if not self._checklist_editable("toggle", item_id):
            return False
        return self.checklist.toggle(item_id, completed)

    def set_clearance_signature(self, item_id: str, value: str) -> bool:
        """Sign off a clearance item. False if rejected or unknown."""
        if not self._checklist_editable("signature", item_id):
            return False
        return self.checklist.set_signature(item_id, value)

    def set_clearance_comments(self, item_id: str, comments: str) -> bool:
        """Comment on a clearance item. False if rejected or unknown."""
        if not self._checklist_editable("comments", item_id):
            return False
        return self.checklist.set_comments(item_id, comments)

    def is_clearance_complete(self) -> bool:
        """Whether every clearance item is completed and signed."""
        return self.checklist.is_complete()

    def clearance_items(self) -> ClearanceItems:
        """Snapshot of the clearance items in display order."""
        return self.checklist.items()

    def complete_clearance(self) -> bool:
        """
        Finish the clearance stage.

        Callers are expected to check ``is_clearance_complete()`` first; an
        incomplete checklist leaves the workflow unchanged.

        Returns:
            True if the workflow moved to COMPLETED
        """
        if self.stage != WorkflowStage.CLEARANCE:
            logger.warning(f"Rejected clearance completion in stage {self.stage.value}")
            return False

        if not self.checklist.is_complete():
            pending = [item.id for item in self.checklist.pending_items()]
            logger.warning(f"Rejected clearance completion, pending items: {', '.join(pending)}")
            return False

        self._transition(WorkflowStage.COMPLETED, "complete_clearance")
        return True

    def return_to_data_entry(self) -> bool:
        """
        Go back from clearance to data entry, keeping the record and checklist.

        Returns:
            True if the workflow moved back to DATA_ENTRY
        """
        if self.stage != WorkflowStage.CLEARANCE:
            logger.warning(f"Rejected return to data entry from stage {self.stage.value}")
            return False

        self._transition(WorkflowStage.DATA_ENTRY, "return_to_data_entry")
        return True

    def restart(self):
        """Discard everything and start over at data entry."""
        previous = self.stage
        self._reset_state()
        logger.info(f"Workflow {self.workflow_id} restarted from {previous.value}")

    def service_duration(self) -> ServiceDuration:
        """Service duration between the record's start and resignation dates."""
        return compute_service_duration(self.record.start_date, self.record.resignation_date)

    def service_duration_text(self) -> str:
        """Human-readable service duration, empty until both dates are set."""
        return format_service_duration(self.record.start_date, self.record.resignation_date)

    def default_financial_start_date(self) -> date:
        """Today minus the configured look-back, used when no start date is given."""
        today = self.clock()
        years = int(self.config.get("default_financial_lookback_years", 1))
        try:
            return today.replace(year=today.year - years)
        except ValueError:
            # 29 February in a non-leap target year
            return today.replace(year=today.year - years, day=28)

    def set_financial_inputs(self, salary: Any = 0, vacation_days: Any = 0,
                             start_date: Optional[date] = None) -> FinancialInputs:
        """
        Set the inputs for the entitlement calculation.

        ``start_date`` is independent of the record's start date; when
        omitted the default look-back date is used.

        Returns:
            The stored FinancialInputs
        """
        self.financial_inputs = FinancialInputs(
            salary=salary,
            vacation_days=vacation_days,
            start_date=start_date or self.default_financial_start_date(),
        )
        return self.financial_inputs.model_copy()

    def entitlement_service_duration(self) -> ServiceDuration:
        """Service duration used by the entitlement calculation."""
        if self.financial_inputs is None:
            return ServiceDuration()
        return compute_service_duration(self.financial_inputs.start_date,
                                        self.record.resignation_date)

    def calculate_entitlements(self) -> EntitlementResult:
        """
        Compute end-of-service entitlements from the current inputs.

        Recomputed on every call; zero figures until financial inputs are set.
        """
        if self.financial_inputs is None:
            return EntitlementResult()
        return calculate_entitlements(self.financial_inputs, self.record.resignation_date)

    def summary(self) -> OffboardingSummary:
        """Read-only snapshot of the whole workflow."""
        return OffboardingSummary(
            workflow_id=self.workflow_id,
            stage=self.stage,
            employee=self.record.model_copy(),
            service_duration=self.service_duration(),
            service_duration_text=self.service_duration_text(),
            clearance_items=self.checklist.items(),
            clearance_complete=self.checklist.is_complete(),
            clearance_requested_on=self.clearance_requested_on,
            entitlements=self.calculate_entitlements() if self.financial_inputs else None,
        )
