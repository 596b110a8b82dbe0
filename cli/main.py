import asyncio

import typer
import uvicorn

from stackroast.app.config import settings

app = typer.Typer(help="StackRoast - submit your tech stack, get roasted")


@app.command()
def start(
    host: str = typer.Option(settings.host, help="Interface to bind"),
    port: int = typer.Option(settings.port, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Start the StackRoast server."""
    typer.echo(f"Starting StackRoast on http://{host}:{port} ...")
    uvicorn.run(
        "stackroast.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("init-db")
def init_db() -> None:
    """Create the database tables without starting the server."""
    from stackroast.app.db import init_db as _init_db

    asyncio.run(_init_db())
    typer.echo(f"Database ready: {settings.database_url}")


if __name__ == "__main__":
    app()
