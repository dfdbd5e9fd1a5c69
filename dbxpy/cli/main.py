"""dbxpy CLI - Main commands."""
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from dbxpy.core.exceptions import DropboxException

app = typer.Typer(
    name="dbxpy",
    help="Dropbox (API v1) command line client",
    add_completion=False
)
console = Console()

DEFAULT_CONFIG = Path.home() / ".config" / "dbxpy" / "dropbox.properties"

ConfigOption = typer.Option(
    None, "--config", "-c",
    help="Properties file with dropbox.app.key/secret and dropbox.access.key/secret"
)


def load_settings(config: Optional[Path]):
    """Settings from --config, the default file, or DBXPY_* variables."""
    from dbxpy import ClientSettings
    
    if config is not None:
        return ClientSettings.from_file(config)
    if DEFAULT_CONFIG.exists():
        return ClientSettings.from_file(DEFAULT_CONFIG)
    return ClientSettings.from_env()


def get_client(config: Optional[Path]):
    """Create an authenticated client or exit."""
    from dbxpy import DropboxClient
    
    settings = load_settings(config)
    if settings.client_credentials() is None:
        console.print("[red]Application key/secret not configured.[/red]")
        raise typer.Exit(1)
    if settings.token_credentials() is None:
        console.print("[red]Not authorized. Run 'dbxpy authorize' first.[/red]")
        raise typer.Exit(1)
    return DropboxClient.from_settings(settings)


def fail(error: Exception):
    console.print(f"[red]{error}[/red]")
    raise typer.Exit(1)


def parse_range(value: str):
    """Parse 'first-last' into a tuple of ints."""
    try:
        first, last = value.split("-", 1)
        return int(first), int(last)
    except ValueError:
        raise typer.BadParameter(f"Expected FIRST-LAST, got '{value}'")


@app.command()
def authorize(config: Optional[Path] = ConfigOption):
    """Run the OAuth flow and print token credentials."""
    from dbxpy import DropboxClient
    
    settings = load_settings(config)
    client_credentials = settings.client_credentials()
    if client_credentials is None:
        console.print("[red]Application key/secret not configured.[/red]")
        raise typer.Exit(1)
    
    with DropboxClient(client_credentials, locale=settings.language) as dropbox:
        try:
            temporary = dropbox.request_temporary_credentials()
            console.print("Open this URL and allow access:")
            console.print(f"[cyan]{dropbox.authorization_url(temporary)}[/cyan]")
            typer.confirm("Access allowed?", abort=True)
            token = dropbox.authorize(temporary)
        except DropboxException as e:
            fail(e)
    
    console.print("[green]Authorized.[/green] Add to your configuration:")
    console.print(f"dropbox.access.key={token.key}", markup=False)
    console.print(f"dropbox.access.secret={token.secret}", markup=False)


@app.command()
def account(config: Optional[Path] = ConfigOption):
    """Show account information."""
    with get_client(config) as dropbox:
        try:
            info = dropbox.account_info()
        except DropboxException as e:
            fail(e)
    
    console.print(f"Name: {info.display_name}")
    console.print(f"User ID: {info.uid}")
    console.print(f"Country: {info.country}")
    console.print(
        f"Storage: {info.quota_used:,} / {info.quota:,} bytes "
        f"({info.used_percent:.1f}% used)"
    )


@app.command()
def ls(
    path: str = typer.Argument("/", help="Folder to list"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
    config: Optional[Path] = ConfigOption,
):
    """List files and folders."""
    with get_client(config) as dropbox:
        try:
            entry = dropbox.metadata("" if path == "/" else path).with_list().as_entry()
        except DropboxException as e:
            fail(e)
    
    children = entry.contents if entry.is_dir else (entry,)
    if long:
        table = Table()
        table.add_column("Type", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Modified")
        table.add_column("Name")
        table.add_column("Rev", style="dim")
        
        for child in children:
            type_str = "D" if child.is_dir else "F"
            size_str = "-" if child.is_dir else f"{child.bytes:,}"
            modified = child.modified.strftime("%Y-%m-%d %H:%M") if child.modified else ""
            table.add_row(type_str, size_str, modified, child.file_name, child.rev or "")
        
        console.print(table)
    else:
        for child in children:
            if child.is_dir:
                console.print(f"[blue]{child.file_name}/[/blue]")
            else:
                console.print(child.file_name)


@app.command()
def get(
    remote_path: str = typer.Argument(..., help="Remote file path"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path"),
    rev: str = typer.Option(None, "--rev", help="Revision to download"),
    byte_range: str = typer.Option(None, "--range", help="Inclusive byte range FIRST-LAST"),
    config: Optional[Path] = ConfigOption,
):
    """Download a file."""
    output_path = output or Path(remote_path.rstrip("/").rsplit("/", 1)[-1])
    
    with get_client(config) as dropbox:
        try:
            download = dropbox.files_get(remote_path)
            if rev:
                download = download.with_rev(rev)
            if byte_range:
                download = download.with_range(*parse_range(byte_range))
            size = download.to_file(output_path)
        except DropboxException as e:
            fail(e)
    
    console.print(f"[green]Downloaded:[/green] {output_path} ({size:,} bytes)")


@app.command()
def put(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    remote_path: str = typer.Argument(..., help="Remote target path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite an existing file"),
    parent_rev: str = typer.Option("", "--parent-rev", help="Revision of the file being edited"),
    chunked: bool = typer.Option(False, "--chunked", help="Upload in chunks (files over 150 MB)"),
    chunk_size: int = typer.Option(4, "--chunk-size", help="Chunk size in MB (1-150)"),
    config: Optional[Path] = ConfigOption,
):
    """Upload a file."""
    from dbxpy import UploadProgress
    from dbxpy.core.upload import MAX_SIMPLE_UPLOAD_SIZE
    
    if not chunked and file_path.stat().st_size > MAX_SIMPLE_UPLOAD_SIZE:
        console.print("[red]File is over 150 MB; use --chunked.[/red]")
        raise typer.Exit(1)
    
    with get_client(config) as dropbox:
        try:
            if not chunked:
                upload = dropbox.files_put(remote_path).with_parent_rev(parent_rev)
                if overwrite:
                    upload = upload.with_overwrite()
                entry = upload.from_file(file_path)
            else:
                upload = (
                    dropbox.chunked_upload(remote_path)
                    .with_parent_rev(parent_rev)
                    .with_chunk_size(chunk_size)
                )
                if overwrite:
                    upload = upload.with_overwrite()
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    TaskProgressColumn(),
                    console=console
                ) as progress:
                    task = progress.add_task(f"Uploading {file_path.name}", total=100)
                    
                    def on_progress(p: UploadProgress):
                        progress.update(task, completed=p.percentage)
                    
                    entry = upload.with_progress(on_progress).from_file(file_path)
        except DropboxException as e:
            fail(e)
    
    console.print(f"[green]Uploaded:[/green] {entry.path}")
    console.print(f"Rev: {entry.rev}")
    console.print(f"Size: {entry.bytes:,} bytes")


@app.command()
def mkdir(
    path: str = typer.Argument(..., help="Folder path to create"),
    config: Optional[Path] = ConfigOption,
):
    """Create a folder."""
    with get_client(config) as dropbox:
        try:
            dropbox.create_folder(path)
        except DropboxException as e:
            fail(e)
    console.print(f"[green]Created folder:[/green] {path}")


@app.command()
def rm(
    path: str = typer.Argument(..., help="File or folder to delete"),
    force: bool = typer.Option(False, "-f", "--force", help="Force delete without confirmation"),
    config: Optional[Path] = ConfigOption,
):
    """Delete a file or folder."""
    if not force:
        typer.confirm(f"Delete '{path}'?", abort=True)
    with get_client(config) as dropbox:
        try:
            dropbox.delete(path)
        except DropboxException as e:
            fail(e)
    console.print(f"[green]Deleted:[/green] {path}")


@app.command()
def cp(
    source: str = typer.Argument(..., help="Source file/folder"),
    dest: str = typer.Argument(..., help="Destination path"),
    config: Optional[Path] = ConfigOption,
):
    """Copy a file or folder."""
    with get_client(config) as dropbox:
        try:
            entry = dropbox.copy(source, dest)
        except DropboxException as e:
            fail(e)
    console.print(f"[green]Copied:[/green] {source} -> {entry.path}")


@app.command()
def mv(
    source: str = typer.Argument(..., help="Source file/folder"),
    dest: str = typer.Argument(..., help="Destination path"),
    config: Optional[Path] = ConfigOption,
):
    """Move a file or folder."""
    with get_client(config) as dropbox:
        try:
            entry = dropbox.move(source, dest)
        except DropboxException as e:
            fail(e)
    console.print(f"[green]Moved:[/green] {source} -> {entry.path}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    sys.exit(main())
