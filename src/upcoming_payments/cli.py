#!/usr/bin/env python
"""
CLI for previewing the upcoming payments view from a saved payload.
"""

import json
from pathlib import Path
from typing import Any

import click

from upcoming_payments.controller import UpcomingPaymentsController
from upcoming_payments.formatting import Formatter
from upcoming_payments.logging import setup_logging
from upcoming_payments.mappers import GroupMapper
from upcoming_payments.models import DisplayGroup, ViewState, ViewStatus


def _load_delivery(path: Path) -> tuple[Any, Any]:
    """Read a payload file as a (data, error) delivery.

    A JSON list is data; an object with an ``error`` key is an error;
    an object with a ``data`` key is data.
    """
    content = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(content, dict):
        if "error" in content:
            return None, content["error"]
        return content.get("data"), None
    return content, None


def _render_group(group: DisplayGroup) -> list[str]:
    method = group.payment_method
    if method.type == "BILL_TO_ACCOUNT":
        payment = method.label
    else:
        parts = [method.nickname, method.card_type, method.ending_in and f"*{method.ending_in}"]
        payment = " ".join(part for part in parts if part)
        if method.expiration:
            payment = f"{payment} (exp {method.expiration})"

    lines = [
        f"{group.name or group.group_id or ''}",
        f"  Next billing: {group.next_date or '—'}",
        f"  Net total:    {group.net_total}",
        f"  Payment:      {payment}",
        f"  {group.accordion_label}",
    ]
    for row in group.detail_rows:
        lines.append(f"    {row.kind.value:<8} {row.description:<40} {row.amount:>14}")
    return lines


def _render_state(state: ViewState) -> str:
    if state.status is ViewStatus.ERRORED:
        return f"Error: {state.error}"
    if not state.has_data:
        return "No upcoming payments."

    lines: list[str] = []
    for group in state.displayed_groups:
        lines.extend(_render_group(group))
        lines.append("")
    lines.append(f"Page {state.current_page} of {state.total_pages}")
    return "\n".join(lines)


@click.group()
def cli() -> None:
    """Upcoming payments view tools."""
    setup_logging()


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--page", default=1, show_default=True, type=click.IntRange(min=1), help="Page")
@click.option("--locale", default=None, help="Locale to format with (defaults to environment)")
@click.option("--currency", default=None, help="ISO 4217 currency code")
@click.option("--json", "as_json", is_flag=True, help="Print the view state as JSON")
def render(
    payload_file: Path, page: int, locale: str | None, currency: str | None, as_json: bool
) -> None:
    """Render one page of the view for a saved payload."""
    try:
        data, error = _load_delivery(payload_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {payload_file}: {e}") from e

    formatter = Formatter.for_locale(locale, currency) if locale else Formatter(currency=currency)
    controller = UpcomingPaymentsController(mapper=GroupMapper(formatter))
    controller.deliver(data=data, error=error)

    for _ in range(min(page, controller.state.total_pages) - 1):
        controller.next_page()

    if as_json:
        click.echo(json.dumps(controller.state.model_dump(mode="json"), indent=2))
    else:
        click.echo(_render_state(controller.state))


if __name__ == "__main__":
    cli()
