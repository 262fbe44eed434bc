"""CLI de diagnóstico (Typer + Rich).

No es parte del Core: solo arma requests desde flags, llama al dispatcher
con el transporte httpx y presenta el `DispatchResult`.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from adapters.http_transport import HttpxTransport
from cli import doctor
from cli.ui_components import build_error_panel, build_response_table, print_banner
from core.config import AppSettings
from core.domain.models import AuthRequest, SignUpNewUserRequest, StartPasskeyEnrollmentRequest
from core.domain.result import DispatchResult
from core.logging import configure_logging
from core.services.backend import AuthBackend

app = typer.Typer(no_args_is_help=True, help="Identity backend RPC client diagnostics.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _load_settings() -> AppSettings:
    settings = AppSettings()
    configure_logging(settings.log_level)
    return settings


def _dispatch(settings: AppSettings, request: AuthRequest) -> DispatchResult:
    backend = AuthBackend(HttpxTransport(settings))
    return asyncio.run(backend.dispatch(request))


def _render(result: DispatchResult) -> None:
    if result.error is not None:
        _console.print(build_error_panel(result.error))
        raise typer.Exit(code=1)
    _console.print(build_response_table(result.response))


@app.command(name="start-enrollment")
def start_enrollment(
    id_token: str = typer.Option(..., "--id-token", help="ID token of the signed-in user."),
    tenant_id: Optional[str] = typer.Option(None, "--tenant-id", help="Tenant ID, if any."),
    banner: bool = typer.Option(False, "--banner/--no-banner", help="Print the banner first."),
) -> None:
    """Start a passkey enrollment and print the creation options."""

    settings = _load_settings()
    if banner:
        print_banner(_console)
    try:
        configuration = settings.request_configuration()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    request = StartPasskeyEnrollmentRequest(
        configuration=configuration,
        id_token=id_token,
        tenant_id=tenant_id,
    )
    _render(_dispatch(settings, request))


@app.command(name="sign-up")
def sign_up(
    email: Optional[str] = typer.Option(None, "--email"),
    password: Optional[str] = typer.Option(None, "--password"),
    display_name: Optional[str] = typer.Option(None, "--display-name"),
    tenant_id: Optional[str] = typer.Option(None, "--tenant-id"),
) -> None:
    """Create a user (anonymous when no email is given) and print the issued tokens."""

    settings = _load_settings()
    try:
        configuration = settings.request_configuration()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    request = SignUpNewUserRequest(
        configuration=configuration,
        email=email,
        password=password,
        display_name=display_name,
        tenant_id=tenant_id,
    )
    _render(_dispatch(settings, request))


def run() -> None:
    app()
