"""Command line entry points: run the server or export the OpenAPI document."""

import json
from pathlib import Path

import typer

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address; defaults to API_HOST"),
    port: int | None = typer.Option(None, help="Port; defaults to API_PORT (4120)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from helium_api.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "helium_api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("openapi")
def openapi(
    output: Path | None = typer.Option(None, "--output", "-o", help="File to write; stdout if omitted"),
) -> None:
    """Write the OpenAPI (swagger) document."""
    from helium_api.main import app as fastapi_app

    document = json.dumps(fastapi_app.openapi(), indent=2)
    if output is None:
        typer.echo(document)
        return

    output.write_text(document + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}")


if __name__ == "__main__":
    app()
