import json
from pathlib import Path
from typing import Callable, Optional

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import AuthorizedSession, Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from rich.console import Console
from rich.markup import escape

from billmark.config import SCOPES
from billmark.errors import AuthError

console = Console()

# OAuth `state` parameter sent with the authorization URL
AUTH_STATE = "state-token"

CLIENT_CONFIG_KEYS = ("client_id", "client_secret", "auth_uri", "token_uri", "redirect_uris")


def load_client_config(client_secrets_path: str) -> dict:
    """Reads the OAuth client JSON downloaded from Google Cloud (Desktop app)."""
    try:
        with open(client_secrets_path, 'r') as f:
            raw = f.read()
    except OSError as e:
        raise AuthError(f"Unable to read client secret file: {e}") from e

    try:
        client_config = json.loads(raw)
    except ValueError as e:
        raise AuthError(f"Unable to parse client secret file to config: {e}") from e

    if not isinstance(client_config, dict) or not ({"installed", "web"} & client_config.keys()):
        raise AuthError(
            "Unable to parse client secret file to config: expected an 'installed' or 'web' client"
        )

    client_type = "installed" if "installed" in client_config else "web"
    section = client_config[client_type]
    if not isinstance(section, dict):
        raise AuthError(f"Unable to parse client secret file to config: '{client_type}' is not an object")
    missing = [key for key in CLIENT_CONFIG_KEYS if not section.get(key)]
    if missing:
        raise AuthError(
            f"Unable to parse client secret file to config: missing {', '.join(missing)}"
        )
    if not isinstance(section["redirect_uris"], list):
        raise AuthError("Unable to parse client secret file to config: redirect_uris must be a list")
    return client_config


def token_from_file(token_path: str, scopes=SCOPES) -> Optional[Credentials]:
    """Returns the cached token, or None if the cache is missing or unreadable."""
    try:
        return Credentials.from_authorized_user_file(str(token_path), scopes)
    except (OSError, ValueError, AttributeError, TypeError):
        # Covers non-object JSON (null, []) and malformed fields such as a numeric expiry
        return None


def _read_code_from_stdin() -> str:
    return console.input("Authorization code: ")


def token_from_web(
    client_config: dict,
    scopes=SCOPES,
    read_code: Callable[[], str] = _read_code_from_stdin,
    use_local_server: bool = False,
) -> Credentials:
    """
    Runs the installed-app authorization flow.

    By default the user opens the printed URL and pastes the code back. With
    `use_local_server` the browser redirects to a temporary localhost server.
    """
    client_type = "installed" if "installed" in client_config else "web"
    redirect_uri = client_config[client_type]["redirect_uris"][0]
    try:
        flow = InstalledAppFlow.from_client_config(client_config, scopes, redirect_uri=redirect_uri)
    except ValueError as e:
        raise AuthError(f"Unable to parse client secret file to config: {e}") from e

    if use_local_server:
        try:
            return flow.run_local_server(port=0, access_type="offline")
        except Exception as e:
            raise AuthError(f"Unable to retrieve token from web: {e}") from e

    auth_url, _ = flow.authorization_url(access_type="offline", state=AUTH_STATE)
    console.print("Go to the following link in your browser then type the authorization code:")
    console.print(auth_url, markup=False, highlight=False, soft_wrap=True)

    try:
        code = read_code().strip()
    except (EOFError, KeyboardInterrupt) as e:
        raise AuthError(f"Unable to read authorization code: {e!r}") from e
    if not code:
        raise AuthError("Unable to read authorization code: no code entered")

    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise AuthError(f"Unable to retrieve token from web: {e}") from e
    return flow.credentials


def save_token(token_path: str, creds: Credentials) -> None:
    console.print(f"Saving credential file to: {token_path}")
    path = Path(token_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(creds.to_json(), encoding="utf-8")
    except OSError as e:
        raise AuthError(f"Unable to cache oauth token: {e}") from e


def get_credentials(
    client_secrets_path: str,
    token_path: str,
    scopes=SCOPES,
    read_code: Callable[[], str] = _read_code_from_stdin,
    use_local_server: bool = False,
) -> Credentials:
    """
    Returns user credentials, from the token cache when possible.

    An expired cached token is refreshed and written back. The interactive
    flow runs only when there is no usable cached token.
    """
    client_config = load_client_config(client_secrets_path)

    creds = token_from_file(token_path, scopes)
    if creds is not None and not creds.valid and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as e:
            console.print(f"[yellow]Cached token could not be refreshed ({escape(str(e))}). Re-authorizing...[/yellow]")
            creds = None
        except TransportError as e:
            raise AuthError(f"Unable to refresh cached token: {e}") from e
        else:
            save_token(token_path, creds)

    if creds is None or not creds.valid:
        creds = token_from_web(client_config, scopes, read_code=read_code, use_local_server=use_local_server)
        save_token(token_path, creds)
    return creds


def obtain_client(
    client_secrets_path: str,
    token_path: str,
    scopes=SCOPES,
    read_code: Callable[[], str] = _read_code_from_stdin,
    use_local_server: bool = False,
) -> AuthorizedSession:
    """Authenticates as the spreadsheet owner and returns an authorized HTTP session."""
    creds = get_credentials(
        client_secrets_path,
        token_path,
        scopes,
        read_code=read_code,
        use_local_server=use_local_server,
    )
    return AuthorizedSession(creds)
