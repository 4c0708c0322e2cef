import typer
from gspread.utils import rowcol_to_a1
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import Optional

from billmark import config
from billmark.errors import AuthError, DispatchError, PayloadError
from billmark.layout import (
    DEBIT_ROWS,
    MONTH_COLUMNS,
    current_month_name,
    debit_to_row,
    is_known_debit,
    is_tracked_month,
    month_to_column,
    parse_month,
)
from billmark.payload import build_format_rule_request, serialize_request

app = typer.Typer()
console = Console()

EXIT_AUTH_FAILED = 1
EXIT_UNTRACKED = 1
EXIT_DISPATCH_FAILED = 2


@app.command()
def mark(
    debit: str = typer.Argument(..., help="Debit code from the tracker (a-o). Run `layout` to list them."),
    month: Optional[str] = typer.Option(None, "--month", "-m", help="Month to mark (e.g. 'sep', 'September', '2024-09'). Defaults to the current month."),
    spreadsheet_id: str = typer.Option(config.SPREADSHEET_ID, "--spreadsheet-id", help="Key of the bill tracker spreadsheet"),
    sheet_id: int = typer.Option(config.SHEET_ID, "--sheet-id", min=0, help="Numeric id of the tracker tab"),
    credentials_path: str = typer.Option(config.CREDENTIALS_PATH, "--creds", help="Path to the OAuth client secret JSON"),
    token_path: str = typer.Option(config.TOKEN_PATH, "--token", help="Path of the cached OAuth token"),
    dry_run: bool = typer.Option(False, "--dry-run", "--shadow-mode", help="Print the request instead of sending it"),
    strict: bool = typer.Option(False, "--strict", help="Fail instead of falling back to index 0 for an untracked month or unknown debit"),
    browser: bool = typer.Option(False, "--browser", help="Authorize through a local redirect server instead of pasting the code"),
):
    """
    Strike through a paid debit in the bill tracker.
    """
    # 1. Resolve the cell
    if month:
        month_name = parse_month(month)
        if not month_name:
            console.print(f"[bold red]Invalid month: '{escape(month)}'. Try 'sep' or '2024-09'.[/bold red]")
            raise typer.Exit(code=EXIT_UNTRACKED)
    else:
        month_name = current_month_name()

    if not is_tracked_month(month_name):
        if strict:
            console.print(f"[bold red]{month_name} has no column in the tracker.[/bold red]")
            raise typer.Exit(code=EXIT_UNTRACKED)
        console.print(f"[yellow]Warning: {month_name} has no column in the tracker. Falling back to column 0.[/yellow]")
    if not is_known_debit(debit):
        if strict:
            console.print(f"[bold red]Unknown debit code: '{escape(debit)}'.[/bold red]")
            raise typer.Exit(code=EXIT_UNTRACKED)
        console.print(f"[yellow]Warning: unknown debit code '{escape(debit)}'. Falling back to row 0.[/yellow]")

    column_index = month_to_column(month_name)
    row_index = debit_to_row(debit)
    console.print(
        f"[bold green]Marking {rowcol_to_a1(row_index + 1, column_index + 1)} "
        f"(debit '{escape(debit)}', {month_name}) as paid[/bold green]",
        soft_wrap=True,
    )

    # 2. Build the request
    try:
        payload = build_format_rule_request(row_index, column_index, sheet_id=sheet_id)
        body = serialize_request(payload)
    except PayloadError as e:
        console.print(escape(str(e)))
        return

    if dry_run:
        console.print("[bold yellow]SHADOW MODE: Not sending the request[/bold yellow]")
        console.print_json(body.decode("utf-8"))
        return

    if not spreadsheet_id:
        console.print("[bold red]Error: no spreadsheet id. Set it in config/sheet_config.json or pass --spreadsheet-id.[/bold red]")
        raise typer.Exit(code=EXIT_AUTH_FAILED)

    # 3. Authenticate and send
    from billmark.auth import obtain_client
    from billmark.sheets_client import BatchUpdateDispatcher, print_response

    try:
        session = obtain_client(credentials_path, token_path, config.SCOPES, use_local_server=browser)
    except AuthError as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        raise typer.Exit(code=EXIT_AUTH_FAILED)

    dispatcher = BatchUpdateDispatcher(session, spreadsheet_id)
    console.print(f"URL:> {dispatcher.endpoint}", markup=False, highlight=False, soft_wrap=True)
    try:
        response = dispatcher.dispatch(body)
    except DispatchError as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        raise typer.Exit(code=EXIT_DISPATCH_FAILED)

    print_response(response)


@app.command()
def layout():
    """
    Show which column each month and which row each debit code maps to.
    """
    month_table = Table(title="Month Columns")
    month_table.add_column("Month", style="cyan", no_wrap=True)
    month_table.add_column("Index", justify="right")
    month_table.add_column("Column", justify="right", style="bold magenta")
    for name, col in MONTH_COLUMNS.items():
        month_table.add_row(name, str(col), rowcol_to_a1(1, col + 1).rstrip("1"))
    console.print(month_table)

    debit_table = Table(title="Debit Rows")
    debit_table.add_column("Debit", style="cyan", no_wrap=True)
    debit_table.add_column("Index", justify="right")
    debit_table.add_column("Row", justify="right", style="bold magenta")
    for code, row in DEBIT_ROWS.items():
        debit_table.add_row(code, str(row), str(row + 1))
    console.print(debit_table)


if __name__ == "__main__":
    app()
