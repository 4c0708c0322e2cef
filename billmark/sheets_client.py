import requests
from google.auth.exceptions import RefreshError, TransportError
from rich.console import Console

from billmark.config import SHEETS_API_BASE
from billmark.errors import DispatchError

console = Console()


class BatchUpdateDispatcher:
    """Sends raw batchUpdate bodies to one spreadsheet."""

    def __init__(self, session: requests.Session, spreadsheet_id: str, api_base: str = SHEETS_API_BASE, timeout: float | None = None):
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id is required")
        self.session = session
        self.spreadsheet_id = spreadsheet_id
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/spreadsheets/{self.spreadsheet_id}:batchUpdate"

    def dispatch(self, body: bytes) -> requests.Response:
        """
        POSTs a serialized batchUpdate body.

        The API's status code is returned as-is inside the response; only a
        failure to send at all raises DispatchError.
        """
        try:
            return self.session.post(
                self.endpoint,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except (requests.RequestException, RefreshError, TransportError) as e:
            raise DispatchError(f"Unable to send batch update to {self.endpoint}: {e}") from e


def print_response(response: requests.Response) -> None:
    status = f"{response.status_code} {response.reason or ''}".strip()
    console.print(f"response Status: {status}", markup=False, highlight=False)
    console.print(f"response Headers: {dict(response.headers)}", markup=False, highlight=False)
    console.print(f"response Body: {response.text}", markup=False, highlight=False, soft_wrap=True)
