"""CLI interface for artfolio."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from artfolio.artifacts import LocalArtifactStore
from artfolio.config import ArtfolioConfig, load_config, merge_cli_overrides
from artfolio.content.store import ContentStateStore
from artfolio.errors import ArtfolioError, CompileFailedError, VersionConflictError

app = typer.Typer(
    name="artfolio",
    help="Build, edit and publish artist portfolio sites.",
)

console = Console()

ArtistArg = Annotated[str, typer.Argument(help="Artist id.")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from artfolio import __version__

        console.print(f"artfolio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log service activity to the console."),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .artfolio.toml file."),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", help="Directory holding the content state store."),
    ] = None,
    artifact_dir: Annotated[
        Optional[Path],
        typer.Option("--artifact-dir", help="Directory for compiled site artifacts."),
    ] = None,
) -> None:
    """Artfolio - portfolio site builder."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    config = load_config(config_path)
    ctx.obj = merge_cli_overrides(
        config,
        data_dir=str(data_dir) if data_dir else None,
        artifact_dir=str(artifact_dir) if artifact_dir else None,
    )


def _config(ctx: typer.Context) -> ArtfolioConfig:
    return ctx.obj if isinstance(ctx.obj, ArtfolioConfig) else ArtfolioConfig()


def _stores(config: ArtfolioConfig) -> tuple[ContentStateStore, LocalArtifactStore]:
    return ContentStateStore(config.data_path), LocalArtifactStore(config.artifacts_path)


def _fail(exc: ArtfolioError) -> NoReturn:
    if isinstance(exc, VersionConflictError):
        console.print(f"[red]Version conflict:[/red] server is at version {exc.server_version}")
    elif isinstance(exc, CompileFailedError):
        console.print(f"[yellow]Saved at version {exc.version}, but compile failed:[/yellow] {exc}")
    else:
        console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(1)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data))


@app.command()
def serve(
    ctx: typer.Context,
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port.")] = None,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from artfolio.api import create_app

    config = merge_cli_overrides(_config(ctx), host=host, port=port)
    console.print(
        f"Serving artfolio on [bold]http://{config.server.host}:{config.server.port}[/bold]"
    )
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)


@app.command()
def token(
    ctx: typer.Context,
    artist: ArtistArg,
    ttl: Annotated[
        Optional[int],
        typer.Option("--ttl", help="Lifetime in minutes."),
    ] = None,
) -> None:
    """Issue an API token for an artist."""
    from artfolio.api import issue_token

    config = _config(ctx)
    typer.echo(issue_token(artist, config.auth.jwt_secret, ttl or config.auth.token_ttl_minutes))


@app.command()
def show(ctx: typer.Context, artist: ArtistArg) -> None:
    """Print an artist's content state, creating it if needed."""
    from artfolio.content.services import get_state

    store, _ = _stores(_config(ctx))
    _print_json(get_state(store, artist).to_wire())


@app.command()
def survey(
    ctx: typer.Context,
    artist: ArtistArg,
    answers: Annotated[
        Path,
        typer.Argument(help="JSON file with survey answers.", exists=True, dir_okay=False),
    ],
) -> None:
    """Merge survey answers from a JSON file."""
    from artfolio.content.services import update_survey

    store, _ = _stores(_config(ctx))
    try:
        payload = json.loads(answers.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error:[/red] {answers} is not valid JSON: {exc}")
        raise typer.Exit(1)
    try:
        state = update_survey(store, artist, payload)
    except ArtfolioError as exc:
        _fail(exc)
    console.print(f"[green]Survey saved[/green] (version {state.version})")


@app.command(name="compile")
def compile_cmd(ctx: typer.Context, artist: ArtistArg) -> None:
    """Compile an artist's site artifact."""
    from artfolio.compiler.services import compile_site

    config = _config(ctx)
    store, artifacts = _stores(config)
    try:
        result = compile_site(store, artifacts, artist, sites_prefix=config.artifacts.sites_prefix)
    except ArtfolioError as exc:
        _fail(exc)
    console.print(f"[green]Compiled[/green] {result.compiled_json_path}")


@app.command()
def edit(
    ctx: typer.Context,
    artist: ArtistArg,
    path: Annotated[str, typer.Argument(help="Content path, e.g. homeContent.title.")],
    value: Annotated[str, typer.Argument(help="New value.")],
    content_type: Annotated[
        str,
        typer.Option("--type", "-t", help="text, html or imageUrl."),
    ] = "text",
    expected_version: Annotated[
        Optional[int],
        typer.Option("--expect-version", help="Reject the edit unless the state is at this version."),
    ] = None,
    recompile: Annotated[
        bool,
        typer.Option("--compile/--no-compile", help="Recompile after the edit."),
    ] = False,
) -> None:
    """Apply a single content edit."""
    from artfolio.editing.services import apply_patch

    config = _config(ctx)
    store, artifacts = _stores(config)
    try:
        result = apply_patch(
            store,
            artifacts,
            artist,
            [{"path": path, "type": content_type, "value": value}],
            expected_version=expected_version,
            recompile=recompile,
            sites_prefix=config.artifacts.sites_prefix,
        )
    except ArtfolioError as exc:
        _fail(exc)
    console.print(f"[green]Updated[/green] {path} (version {result.version})")


@app.command()
def publish(ctx: typer.Context, artist: ArtistArg, slug: Annotated[str, typer.Argument()]) -> None:
    """Publish an artist's site under a slug."""
    from artfolio.publishing.services import publish as publish_site

    store, _ = _stores(_config(ctx))
    try:
        state = publish_site(store, artist, slug)
    except ArtfolioError as exc:
        _fail(exc)
    console.print(f"[green]Published[/green] {artist} as [bold]{state.published_url}[/bold]")


@app.command(name="start-over")
def start_over_cmd(ctx: typer.Context, artist: ArtistArg) -> None:
    """Drop the compiled site and reset the artist to the survey."""
    from artfolio.content.services import start_over

    config = _config(ctx)
    store, artifacts = _stores(config)
    try:
        start_over(store, artifacts, artist, sites_prefix=config.artifacts.sites_prefix)
    except ArtfolioError as exc:
        _fail(exc)
    console.print("[green]Start over succeeded[/green]")


@app.command()
def render(
    ctx: typer.Context,
    artist: ArtistArg,
    page: Annotated[str, typer.Argument(help="home, works or about.")] = "home",
    layout: Annotated[
        Optional[str],
        typer.Option("--layout", "-l", help="Override the surveyed layout."),
    ] = None,
    index: Annotated[int, typer.Option("--index", help="Artwork index for single works.")] = 0,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write markup here instead of stdout."),
    ] = None,
) -> None:
    """Render a page of the compiled site to HTML."""
    from artfolio.compiler.services import load_compiled_site
    from artfolio.renderer import PageState, Renderer, TemplateStore

    config = _config(ctx)
    _, artifacts = _stores(config)
    try:
        compiled = load_compiled_site(artifacts, artist, sites_prefix=config.artifacts.sites_prefix)
    except ArtfolioError as exc:
        _fail(exc)
    if compiled is None:
        console.print(f"[yellow]No compiled site for {artist}. Run 'artfolio compile' first.[/yellow]")
        raise typer.Exit(1)

    templates_dir = Path(config.renderer.templates_dir) if config.renderer.templates_dir else None
    renderer = Renderer(
        TemplateStore(templates_dir),
        empty_message=config.renderer.empty_artworks_message,
        editable=False,
    )
    renderer.load(compiled)

    survey_data = renderer.compiled.get("surveyData", {})
    page_key = "homepage" if page == "home" else page
    layout = layout or survey_data.get("layouts", {}).get(page_key)
    works = [a for items in survey_data.get("worksSelections", {}).values() for a in items]
    state = PageState(
        home_selections=renderer.compiled.get("homeContent", {}).get("homeSelections")
        or survey_data.get("homeSelections", []),
        works_selection=works,
        works_index=index,
    )
    markup = renderer.render(page, layout or "grid", state)

    if output is None:
        typer.echo(markup)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(markup, encoding="utf-8")
        console.print(f"Wrote {output}")


if __name__ == "__main__":
    app()
