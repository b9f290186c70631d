#!/usr/bin/env python3
"""
Offboarding Control CLI - Command Line Interface for the Offboarding Engine.

Provides commands for walking an employee through offboarding, computing
service duration and end-of-service entitlements, and listing the
clearance checklist.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import configure_logging, load_config
from ..engine import DEFAULT_CLEARANCE_CATALOG, compute_service_duration
from ..engine.entitlements import calculate_entitlements
from ..exceptions import ConfigurationError
from ..models import EntitlementResult, FinancialInputs, OffboardingSummary, ServiceDuration
from ..workflows import (
    OffboardingWorkflow,
    format_amount,
    format_date,
    format_service_duration,
)

logger = logging.getLogger(__name__)

# Rich console for pretty output
console = Console()

DATE_INPUT_FORMAT = "%Y-%m-%d"


class OffboardingController:
    """Holds configuration shared by the CLI commands."""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None):
        self.config = load_config(config_path)
        if log_level:
            self.config["log_level"] = log_level
        configure_logging(self.config["log_level"])

    @property
    def date_format(self) -> str:
        return self.config.get("date_format", "%d/%m/%Y")

    @property
    def currency(self) -> str:
        return self.config.get("currency", "SAR")

    def new_workflow(self) -> OffboardingWorkflow:
        return OffboardingWorkflow(self.config)


def _parse_optional_date(text: str) -> Optional[date]:
    text = (text or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, DATE_INPUT_FORMAT).date()
    except ValueError:
        console.print(f"[red]Invalid date '{text}', expected YYYY-MM-DD[/red]")
        return None


@click.group()
@click.option('--config', '-c', type=click.Path(), help='Path to a YAML or JSON configuration file')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Override the configured log level')
@click.pass_context
def cli(ctx, config, log_level):
    """Offboarding Engine CLI - resignation, clearance and end-of-service entitlements"""
    ctx.ensure_object(dict)
    try:
        ctx.obj['controller'] = OffboardingController(config, log_level)
    except ConfigurationError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.option('--salary', type=float, required=True, help='Monthly salary')
@click.option('--vacation-days', type=float, default=0.0, show_default=True,
              help='Unused vacation days')
@click.option('--start-date', type=click.DateTime(formats=[DATE_INPUT_FORMAT]), required=True,
              help='Service start date (YYYY-MM-DD)')
@click.option('--end-date', type=click.DateTime(formats=[DATE_INPUT_FORMAT]), required=True,
              help='Service end date (YYYY-MM-DD)')
@click.pass_context
def calculate(ctx, salary, vacation_days, start_date, end_date):
    """Calculate end-of-service entitlements."""
    controller = ctx.obj['controller']

    inputs = FinancialInputs(salary=salary, vacation_days=vacation_days,
                             start_date=start_date.date())
    end = end_date.date()
    duration = compute_service_duration(inputs.start_date, end)
    result = calculate_entitlements(inputs, end)

    display_duration(duration, format_service_duration(inputs.start_date, end))
    display_entitlements(result, controller.currency, inputs)


@cli.command()
@click.argument('start_date', type=click.DateTime(formats=[DATE_INPUT_FORMAT]))
@click.argument('end_date', type=click.DateTime(formats=[DATE_INPUT_FORMAT]))
def duration(start_date, end_date):
    """Show the service duration between two dates."""
    start, end = start_date.date(), end_date.date()
    display_duration(compute_service_duration(start, end), format_service_duration(start, end))


@cli.command()
def checklist():
    """List the clearance checklist items."""
    table = Table(title="Clearance Checklist")
    table.add_column("#", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Item", style="green")
    table.add_column("Department", style="magenta")

    for index, (item_id, title, department) in enumerate(DEFAULT_CLEARANCE_CATALOG, start=1):
        table.add_row(str(index), item_id, title, department)

    console.print(table)


@cli.command()
@click.pass_context
def walkthrough(ctx):
    """Walk an employee through the offboarding workflow interactively."""
    controller = ctx.obj['controller']
    workflow = controller.new_workflow()

    console.print(Panel.fit("[bold blue]Resignation Form[/bold blue]"))
    _collect_resignation_details(workflow)

    text = workflow.service_duration_text()
    if text:
        console.print(f"Service duration: [bold]{text}[/bold]")

    console.print(Panel.fit("[bold blue]Clearance Form[/bold blue]"))
    console.print(f"Clearance requested on "
                  f"{format_date(workflow.clearance_requested_on, controller.date_format)}")
    _collect_sign_offs(workflow)

    workflow.complete_clearance()
    console.print("[green]✓ Clearance completed successfully[/green]")

    if click.confirm("Calculate end-of-service entitlements?", default=True):
        _collect_financial_inputs(workflow)

    display_summary(workflow.summary(), controller.date_format, controller.currency)
    logger.info(f"Walkthrough finished for workflow {workflow.workflow_id}")


def _collect_resignation_details(workflow: OffboardingWorkflow):
    """Prompt for resignation details until they pass validation."""
    while True:
        fields: Dict[str, Any] = {
            "name": click.prompt("Full name", default="", show_default=False),
            "job_title": click.prompt("Job title", default="", show_default=False),
            "start_date": _parse_optional_date(
                click.prompt("Start date (YYYY-MM-DD, optional)", default="", show_default=False)),
            "resignation_date": _parse_optional_date(
                click.prompt("Resignation date (YYYY-MM-DD)", default="", show_default=False)),
            "reason": click.prompt("Reason (optional)", default="", show_default=False),
        }

        errors = workflow.submit_data_entry(fields)
        if not errors:
            return

        console.print("[red]Please correct the following:[/red]")
        for field_name, message in errors.items():
            console.print(f"  - {field_name}: {message}")


def _collect_sign_offs(workflow: OffboardingWorkflow):
    """Prompt for each pending clearance item until the checklist is complete."""
    while not workflow.is_clearance_complete():
        for item in workflow.checklist.pending_items():
            console.print(f"\n[bold]{item.title}[/bold] ({item.department})")
            workflow.toggle_clearance_item(item.id, click.confirm("Completed?", default=True))
            workflow.set_clearance_signature(
                item.id, click.prompt("Responsible signature", default=item.signature,
                                      show_default=False))

        progress = workflow.checklist.get_progress_summary()
        console.print(f"Cleared {progress['cleared']} of {progress['total_items']} items "
                      f"({progress['completed']} completed, {progress['signed']} signed)")
        pending = progress['total_items'] - progress['cleared']
        if pending:
            console.print(f"[yellow]{pending} item(s) still need completion and a "
                          f"signature[/yellow]")


def _collect_financial_inputs(workflow: OffboardingWorkflow):
    default_start = workflow.record.start_date or workflow.default_financial_start_date()
    salary = click.prompt("Monthly salary", default="0")
    vacation_days = click.prompt("Unused vacation days", default="0")
    start_date = _parse_optional_date(
        click.prompt("Service start date (YYYY-MM-DD)", default=default_start.isoformat()))

    workflow.set_financial_inputs(salary=salary, vacation_days=vacation_days,
                                  start_date=start_date or default_start)


def display_duration(duration: ServiceDuration, text: str):
    """Display a service duration."""
    table = Table(title="Service Duration")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Years", str(duration.years))
    table.add_row("Months", str(duration.months))
    table.add_row("Decimal Years", f"{duration.decimal_years:.2f}")
    table.add_row("Duration", text or "N/A")

    console.print(table)


def display_entitlements(result: EntitlementResult, currency: str,
                         inputs: Optional[FinancialInputs] = None):
    """Display an entitlement breakdown."""
    table = Table(title="End-of-Service Entitlements")
    table.add_column("Item", style="cyan")
    table.add_column("Amount", style="magenta", justify="right")

    if inputs is not None:
        table.add_row("Monthly Salary", format_amount(inputs.salary, currency))
        table.add_row("Unused Vacation Days", f"{inputs.vacation_days:g}")
    table.add_row("End-of-Service Benefit", format_amount(result.end_of_service_benefit, currency))
    table.add_row("Vacation Compensation", format_amount(result.vacation_compensation, currency))
    table.add_row("[bold]Total[/bold]", f"[bold]{format_amount(result.total, currency)}[/bold]")

    console.print(table)


def display_summary(summary: OffboardingSummary, date_format: str, currency: str):
    """Display the final offboarding summary."""
    employee = summary.employee
    console.print(Panel.fit(f"[bold blue]{employee.name}[/bold blue]\n{employee.job_title}"))
    console.print(f"Status: {summary.stage.value}")
    console.print(f"Start date: {format_date(employee.start_date, date_format)}")
    console.print(f"Resignation date: {format_date(employee.resignation_date, date_format)}")
    console.print(f"Service duration: {summary.service_duration_text or 'N/A'}")
    if employee.reason:
        console.print(f"Reason: {employee.reason}")

    table = Table(title="Clearance Sign-offs")
    table.add_column("Item", style="green")
    table.add_column("Department", style="magenta")
    table.add_column("Signed By", style="cyan")

    for item in summary.clearance_items:
        table.add_row(item.title, item.department, item.signature or "-")

    console.print(table)

    if summary.entitlements is not None:
        display_entitlements(summary.entitlements, currency)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
